import pytest

from requirement_parser import infer_scenario, parse_requirement_locally, parse_time_window

YANGTZE_CITIES = ["上海", "苏州", "杭州", "南京", "无锡", "合肥"]


def test_parses_yangtze_ai_medical_requirement():
    profile = parse_requirement_locally("找2023年以后在长三角做AI医疗，完成A/B轮融资的公司")
    assert profile["region_preference"] == YANGTZE_CITIES
    assert profile["industry_preference"] == ["AI", "医疗"]
    assert set(profile["stage_preference"]) == {"A轮", "A+轮", "B轮"}
    assert profile["time_window"] == "2023年以后"
    assert profile["scenario"] == "创新园区 / 总部办公"
    assert profile["extra_preferences"] == []


def test_parses_shenzhen_robotics_requirement():
    profile = parse_requirement_locally("适合深圳智能制造产业园的机器人企业，最好有头部基金投资")
    assert profile["region_preference"] == ["深圳"]
    assert profile["industry_preference"] == ["机器人", "智能制造"]
    assert profile["extra_preferences"] == ["头部基金"]
    assert profile["scenario"] == "产业园"


def test_region_group_and_city_are_not_duplicated():
    profile = parse_requirement_locally("华东地区，尤其是上海的新能源企业，处于快速增长期")
    assert profile["region_preference"] == YANGTZE_CITIES
    assert profile["industry_preference"] == ["新能源"]
    assert profile["extra_preferences"] == ["增长"]
    assert profile["scenario"] == "产业园 / 制造工厂"


def test_industry_match_is_case_insensitive():
    profile = parse_requirement_locally("北京的ai和saas公司")
    assert profile["industry_preference"] == ["AI", "SaaS"]
    assert profile["region_preference"] == ["北京"]


@pytest.mark.parametrize("text, expected", [
    ("过去3年融资的企业", "近3年内"),
    ("最近2年", "近2年内"),
    ("过去一年在上海融资", "近1年内"),
    ("近两年完成融资", "近2年内"),
    ("2022年之后成立", "2022年以后"),
    ("2021年至今", "2021年以后"),
    ("没有时间要求", ""),
])
def test_time_window(text, expected):
    assert parse_time_window(text) == expected


def test_scenario_inference():
    assert infer_scenario("需要一个研发中心", ["AI"]) == "研发中心"
    assert infer_scenario("", ["生物医药"]) == "研发中心 / 实验室"
    assert infer_scenario("", ["物流"]) == "创新园区"


def test_empty_text_gives_empty_profile():
    profile = parse_requirement_locally("")
    assert profile == {
        "region_preference": [],
        "industry_preference": [],
        "stage_preference": [],
        "time_window": "",
        "extra_preferences": [],
        "scenario": "创新园区",
    }
