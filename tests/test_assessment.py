import pytest

from assessment import (
    credibility_level,
    generate_local_analysis,
    generate_local_assessment,
    industry_family,
    match_level,
    overall_rating,
)
from normalizer import CREDIBILITY_LEVELS, INTRODUCE_OPTIONS, MATCH_LEVELS, RECOMMENDATIONS

ASSESSMENT_MODULES = [
    "companyProfile",
    "landingAssessment",
    "industryMatch",
    "coreValue",
    "riskAssessment",
    "introductionStrategy",
    "negotiationTerms",
    "conclusion",
    "insufficientInfo",
]


def by_id(companies, company_id):
    return next(c for c in companies if c["id"] == company_id)


def test_analysis_for_growing_backed_company(company):
    analysis = generate_local_analysis("苏州机器人", company)
    assert analysis["matchPoints"] == [
        "公司处于快速增长阶段，发展势头良好",
        "获得头部投资机构背书（高瓴创投、元禾控股）",
        "具备差异化优势：量产、出口欧洲",
    ]
    assert analysis["risks"] == ["需关注行业竞争态势及市场变化"]
    assert analysis["recommendation"] == "推荐"
    assert "产业园区" in analysis["suitableVenue"]


def test_analysis_for_early_stage_company(companies):
    analysis = generate_local_analysis("", by_id(companies, "c005"))
    assert analysis["risks"] == [
        "公司处于早期阶段，商业模式尚未完全验证",
        "产品处于研发/试验阶段，商业化周期较长",
    ]
    assert analysis["recommendation"] == "谨慎推荐"
    assert "实验室" in analysis["suitableVenue"]


def test_analysis_without_signals_describes_track():
    company = {"track": "智慧物流", "last_round": "A轮", "industry": ["物流"], "investors": [], "tags": []}
    analysis = generate_local_analysis("", company)
    assert analysis["matchPoints"] == ["在智慧物流赛道有明确定位", "已完成A轮融资，具备一定资金实力"]
    assert analysis["recommendation"] in RECOMMENDATIONS


@pytest.mark.parametrize("company_id, rating", [("c002", 5), ("c003", 5), ("c012", 4), ("c005", 1), ("c010", 1)])
def test_overall_rating(companies, company_id, rating):
    assert overall_rating(by_id(companies, company_id)) == rating


@pytest.mark.parametrize("score, level", [
    (None, "一般"), (95, "高度匹配"), (80, "高度匹配"), (60, "匹配"), (40, "一般"), (39, "不匹配"),
])
def test_match_level(score, level):
    assert match_level(score) == level


def test_credibility_level(companies):
    assert credibility_level(by_id(companies, "c002")) == "高可信"
    assert credibility_level(by_id(companies, "c005")) == "存疑"
    assert credibility_level(by_id(companies, "c012")) == "中等可信"


def test_industry_family(companies):
    assert industry_family(by_id(companies, "c002")) == "manufacturing"
    assert industry_family(by_id(companies, "c009")) == "life_science"
    assert industry_family(by_id(companies, "c003")) == "digital"
    assert industry_family(by_id(companies, "c010")) == "other"


def test_local_assessment_has_every_module(company):
    assessment = generate_local_assessment("苏州机器人", company)
    assert list(assessment) == ASSESSMENT_MODULES
    assert assessment["landingAssessment"]["credibilityLevel"] in CREDIBILITY_LEVELS
    assert assessment["industryMatch"]["matchLevel"] in MATCH_LEVELS
    assert assessment["introductionStrategy"]["recommendIntroduce"] in INTRODUCE_OPTIONS
    assert len(assessment["negotiationTerms"]) == 5
    assert len(assessment["companyProfile"]["summary"]) <= 300
    assert set(assessment["riskAssessment"]) == {"financialRisk", "businessRisk", "competitionRisk", "policyRisk"}


def test_local_assessment_recommendation_follows_rating(company, companies):
    strong = generate_local_assessment("", company)
    assert strong["conclusion"]["overallRating"] == 5
    assert strong["introductionStrategy"]["recommendIntroduce"] == "是"

    weak = generate_local_assessment("", by_id(companies, "c005"))
    assert weak["conclusion"]["overallRating"] == 1
    assert weak["introductionStrategy"]["recommendIntroduce"] == "不建议"
    assert weak["landingAssessment"]["credibilityLevel"] == "存疑"


def test_local_assessment_uses_match(company):
    match = {"company_id": "c002", "match_score": 85, "match_reason": "地域与赛道均匹配"}
    assessment = generate_local_assessment("", company, match)
    assert assessment["industryMatch"]["matchLevel"] == "高度匹配"
    assert assessment["industryMatch"]["dominantIndustryFit"] == "地域与赛道均匹配"


def test_conclusion_reuses_analysis(company):
    analysis = generate_local_analysis("", company)
    conclusion = generate_local_assessment("", company)["conclusion"]
    assert conclusion["biggestOpportunity"] == analysis["matchPoints"][0]
    assert conclusion["biggestRisk"] == analysis["risks"][0]


def test_insufficient_info_lists_missing_fields():
    company = {
        "name": "某企业", "city": "武汉", "industry": [], "track": "", "register_year": 0,
        "last_round": "", "last_round_amount": "未披露", "investors": [], "tags": [],
    }
    assessment = generate_local_assessment("", company)
    assert assessment["insufficientInfo"] == [
        "营收与利润数据",
        "拟落地投资额与用地需求",
        "投资方信息",
        "最近一轮融资金额",
        "成立年份",
    ]
