import json
from datetime import date

from assessment import generate_local_assessment
from conftest import tool_response
from normalizer import (
    as_string_list,
    clamp_score,
    coerce_assessment,
    coerce_generated,
    coerce_matches,
    coerce_news_items,
    coerce_profile,
    extract_complete_objects,
    extract_tool_payload,
    merge_profiles,
    parse_json_text,
    profile_is_empty,
)

NEWS_ITEM = {
    "title": "灵犀机器人完成5亿元C轮融资",
    "company": "灵犀机器人",
    "industry": "机器人",
    "category": "tech",
    "amount": "5亿元",
    "investors": "高瓴创投",
    "publishDate": "2024-06-01",
    "content": "协作机器人企业灵犀机器人完成5亿元C轮融资。",
}


def test_parse_json_text_strategies():
    assert parse_json_text('{"a": 1}') == {"a": 1}
    assert parse_json_text('结果如下：\n```json\n{"a": 2}\n```') == {"a": 2}
    assert parse_json_text("<think>先分析一下</think>\n[1, 2]") == [1, 2]
    assert parse_json_text('好的，这是结果 {"a": 3} 希望有帮助') == {"a": 3}
    assert parse_json_text('{"a": [1, 2') is None
    assert parse_json_text("") is None
    assert parse_json_text(None) is None


def test_extract_tool_payload_from_string_arguments():
    parsed, raw = extract_tool_payload(tool_response("parse_requirement", {"scenario": "产业园"}))
    assert parsed == {"scenario": "产业园"}
    assert "产业园" in raw


def test_extract_tool_payload_from_object_arguments():
    response = {"choices": [{"message": {"tool_calls": [{"function": {"arguments": {"x": 1}}}]}}]}
    parsed, raw = extract_tool_payload(response)
    assert parsed == {"x": 1}
    assert json.loads(raw) == {"x": 1}


def test_extract_tool_payload_falls_back_to_content():
    response = {"choices": [{"message": {"content": '```json\n{"matches": []}\n```'}}]}
    parsed, _ = extract_tool_payload(response)
    assert parsed == {"matches": []}


def test_extract_tool_payload_truncated_keeps_raw():
    truncated = '{"news": [' + json.dumps(NEWS_ITEM, ensure_ascii=False) + ', {"title": "半截'
    parsed, raw = extract_tool_payload(tool_response("return_news", truncated))
    assert parsed is None
    assert raw == truncated


def test_extract_tool_payload_handles_empty_response():
    assert extract_tool_payload({}) == (None, "")
    assert extract_tool_payload({"choices": []}) == (None, "")


def test_extract_complete_objects_salvages_truncated_news():
    second = dict(NEWS_ITEM, title="第二条")
    text = '{"news": [%s, %s, {"title": "第三条", "company": "某公' % (
        json.dumps(NEWS_ITEM, ensure_ascii=False),
        json.dumps(second, ensure_ascii=False),
    )
    items = extract_complete_objects(text, ["title", "company", "content"])
    assert [item["title"] for item in items] == [NEWS_ITEM["title"], "第二条"]


def test_extract_complete_objects_filters_required_keys():
    assert extract_complete_objects('[{"a": 1}, {"b": 2}]', ["a"]) == [{"a": 1}]


def test_as_string_list_splits_and_dedupes():
    assert as_string_list("上海、苏州，上海/杭州") == ["上海", "苏州", "杭州"]
    assert as_string_list(["A轮", " ", None, "B轮", 3]) == ["A轮", "B轮", "3"]
    assert as_string_list("1. 第一点\n2. 第二点", r"\n") == ["第一点", "第二点"]


def test_clamp_score():
    assert clamp_score(85.6) == 86
    assert clamp_score("92分") == 92
    assert clamp_score(150) == 100
    assert clamp_score(-3) == 0
    assert clamp_score(None) == 0
    assert clamp_score(float("nan")) == 0


def test_coerce_profile_fills_defaults():
    profile = coerce_profile({"region_preference": "上海，杭州", "scenario": None, "time_window": 2023})
    assert profile["region_preference"] == ["上海", "杭州"]
    assert profile["industry_preference"] == []
    assert profile["scenario"] == ""
    assert profile["time_window"] == "2023"
    assert profile_is_empty(coerce_profile("not a dict"))


def test_merge_profiles_prefers_primary(empty_profile):
    primary = dict(empty_profile, industry_preference=["人工智能"])
    fallback = dict(empty_profile, industry_preference=["AI"], region_preference=["上海"], scenario="产业园")
    merged = merge_profiles(primary, fallback)
    assert merged["industry_preference"] == ["人工智能"]
    assert merged["region_preference"] == ["上海"]
    assert merged["scenario"] == "产业园"
    assert merged["time_window"] == ""


def test_coerce_matches_keeps_known_candidates(companies):
    arguments = {"matches": [
        {"company_id": "c001", "score": 91.2, "reason": "地域与赛道均匹配"},
        {"company_id": "c999", "score": 99, "reason": "不存在"},
        {"company_id": "c001", "score": 10, "reason": "重复"},
        {"id": "c003", "match_score": "75", "match_reason": ""},
    ]}
    matches = coerce_matches(arguments, "", companies)
    assert [m["company_id"] for m in matches] == ["c001", "c003"]
    assert matches[0]["match_score"] == 91
    assert matches[0]["company"]["name"] == "深瞳医疗科技"
    assert matches[1]["match_reason"] == "基本符合招商需求"
    assert all(m["source"] == "ai" for m in matches)


def test_coerce_matches_salvages_truncated_list(companies):
    raw = '{"matches": [{"company_id": "c002", "score": 80, "reason": "机器人"}, {"company_id": "c00'
    matches = coerce_matches(None, raw, companies)
    assert [m["company_id"] for m in matches] == ["c002"]


def test_coerce_generated_builds_companies():
    arguments = {"companies": [
        {"name": "星河智造", "city": "苏州", "industry": "机器人、智能制造", "last_round": "B轮",
         "register_year": "2019", "match_score": 88, "match_reason": "长三角机器人企业"},
        {"name": "", "match_score": 50},
        {"name": "星河智造", "match_score": 70},
    ]}
    matches = coerce_generated(arguments, "")
    assert len(matches) == 1
    company = matches[0]["company"]
    assert company["id"] == "ai_001"
    assert company["industry"] == ["机器人", "智能制造"]
    assert company["register_year"] == 2019
    assert company["investors"] == []
    assert matches[0]["match_score"] == 88


def test_coerce_generated_keeps_ids_unique():
    arguments = {"companies": [
        {"id": "ai_003", "name": "甲公司"},
        {"id": "x", "name": "乙公司"},
        {"id": "x", "name": "丙公司"},
        {"name": "丁公司"},
    ]}
    ids = [m["company_id"] for m in coerce_generated(arguments, "")]
    assert len(ids) == 4
    assert len(set(ids)) == 4
    assert ids[:2] == ["ai_003", "x"]


def test_coerce_assessment_merges_over_base(company):
    base = generate_local_assessment("苏州机器人", company)
    raw = {
        "companyProfile": {"summary": "模型给出的总结"},
        "landingAssessment": {"credibilityLevel": "非常可信"},
        "industryMatch": {"matchLevel": "高度匹配"},
        "introductionStrategy": {"recommendIntroduce": "是", "policyPriority": "厂房补贴；人才补贴"},
        "negotiationTerms": ["一", "二", "三", "四", "五", "六"],
        "conclusion": {"overallRating": 9},
        "insufficientInfo": [],
    }
    merged = coerce_assessment(raw, base)
    assert merged["companyProfile"]["summary"] == "模型给出的总结"
    assert merged["companyProfile"]["coreTechnology"] == base["companyProfile"]["coreTechnology"]
    assert merged["landingAssessment"]["credibilityLevel"] == base["landingAssessment"]["credibilityLevel"]
    assert merged["industryMatch"]["matchLevel"] == "高度匹配"
    assert merged["introductionStrategy"]["policyPriority"] == ["厂房补贴", "人才补贴"]
    assert merged["negotiationTerms"] == ["一", "二", "三", "四", "五"]
    assert merged["conclusion"]["overallRating"] == 5
    assert merged["insufficientInfo"] == []
    assert merged["riskAssessment"] == base["riskAssessment"]


def test_coerce_assessment_without_insufficient_key_keeps_base(company):
    base = generate_local_assessment("", company)
    merged = coerce_assessment({"conclusion": {"overallRating": 0}}, base)
    assert merged["insufficientInfo"] == base["insufficientInfo"]
    assert merged["conclusion"]["overallRating"] == 1


def test_coerce_news_items_normalizes_fields():
    items = [
        dict(NEWS_ITEM, category="医疗", industry="生物医药", publishDate="6月1日"),
        dict(NEWS_ITEM, content=""),
        dict(NEWS_ITEM, category="Energy"),
    ]
    news = coerce_news_items({"news": items}, "", today=date(2024, 6, 3))
    assert len(news) == 2
    assert news[0]["category"] == "healthcare"
    assert news[0]["publishDate"] == "2024-06-03"
    assert news[1]["category"] == "energy"
    assert news[1]["publishDate"] == "2024-06-01"
