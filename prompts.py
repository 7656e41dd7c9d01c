import json
from datetime import date
from typing import Dict, List, Optional


REQUIREMENT_ANALYSIS_PROMPT = """你是招商助手，请阅读用户的一段招商需求文本，提取出结构化筛选条件。

【用户需求】：
{requirement_text}

请抽取：
- region_preference：地域/城市/区域关键词列表
- industry_preference：行业/赛道关键词列表
- stage_preference：融资轮次（如：天使轮、A轮、B轮等）
- time_window：如果提到最近几年/某个时间段，请解析为描述字符串
- extra_preferences：其它偏好（如是否有头部基金、是否已商业化、是否团队在扩张等）
- scenario：适配场景（如：产业园、总部办公、实验室、制造工厂等的推理）
"""

COMPANY_MATCHING_PROMPT = """你是招商匹配引擎，请根据"用户需求画像"和"候选企业列表"，为每家企业打一个0-100的匹配分数，并给出一行中文理由。

【用户需求画像】：
{requirement_profile}

【候选企业列表】：
{candidate_companies}
"""

COMPANY_GENERATION_PROMPT = """你是招商情报检索引擎。请根据用户的招商需求，推荐{count}家真实存在、近期有融资动态的中国企业。

【用户原始需求】：
{requirement_text}

【解析后的需求画像】：
{requirement_profile}

每家企业需给出所在城市与省份、行业、细分赛道、成立年份、最近一轮融资（轮次、日期YYYY-MM-DD、金额、投资方）、业务简介、发展阶段（早期/快速增长/成熟期），以及0-100的匹配分数和一句话匹配理由。
"""

COMPANY_ANALYSIS_PROMPT = """你是招商顾问。根据【用户需求】与【公司信息】，用简短中文给出招商视角的分析。

【用户需求】：
{requirement_text}

【公司信息】：
{company}

请给出：与需求的匹配点（2-3条）、主要风险或不确定性（1-2条）、适合的园区或载体（一句话）、最终建议（推荐/谨慎推荐/不推荐）及一句话理由。
"""

GOVERNMENT_ASSESSMENT_PROMPT = """你是地方政府的招商评估专家。请站在地方政府视角，对下列企业出具一份招商评估报告。

【招商需求】：
{requirement_text}

【企业信息】：
{company}

报告需覆盖：企业综合画像、项目真实性与落地判断、与地方产业匹配度、可为地方带来的核心价值、主要风险识别（财务/经营/竞争/政策，每项写明风险来源与对地方的影响）、政府引入策略建议、5条招商谈判关键条款、综合结论（1-5星）。
凡依据不足的判断，请把对应字段名写入 insufficientInfo，不要编造。
"""


def _string_array(description: str) -> Dict:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def _risk_item(description: str) -> Dict:
    return {
        "type": "object",
        "description": description,
        "properties": {
            "source": {"type": "string", "description": "风险来源"},
            "localImpact": {"type": "string", "description": "对地方的影响"},
        },
        "required": ["source", "localImpact"],
    }


COMPANY_PROPERTIES = {
    "id": {"type": "string"},
    "name": {"type": "string", "description": "企业名称"},
    "city": {"type": "string"},
    "province": {"type": "string"},
    "industry": _string_array("行业"),
    "track": {"type": "string", "description": "细分赛道"},
    "register_year": {"type": "integer"},
    "last_round": {"type": "string"},
    "last_round_date": {"type": "string", "description": "YYYY-MM-DD"},
    "last_round_amount": {"type": "string"},
    "investors": _string_array("投资方"),
    "headline": {"type": "string"},
    "business_summary": {"type": "string"},
    "news_snippet": {"type": "string"},
    "growth_stage": {"type": "string", "description": "早期/快速增长/成熟期"},
    "tags": _string_array("标签"),
    "match_score": {"type": "number", "description": "匹配分数 0-100"},
    "match_reason": {"type": "string", "description": "匹配原因"},
}


TOOLS = {
    "parse_requirement": {
        "description": "从用户需求文本中提取结构化的招商需求信息",
        "parameters": {
            "type": "object",
            "properties": {
                "region_preference": _string_array("地区偏好，如北京、上海、长三角等"),
                "industry_preference": _string_array("行业偏好，如人工智能、新能源、半导体等"),
                "stage_preference": _string_array("融资阶段偏好，如A轮、B轮、C轮等"),
                "time_window": {"type": "string", "description": "时间窗口要求"},
                "extra_preferences": _string_array("其他偏好，如头部投资机构背书、团队扩张等"),
                "scenario": {"type": "string", "description": "适用场景"},
            },
            "required": ["region_preference", "industry_preference", "stage_preference"],
        },
    },
    "match_companies": {
        "description": "根据用户需求匹配公司并返回匹配分数和原因",
        "parameters": {
            "type": "object",
            "properties": {
                "matches": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "company_id": {"type": "string"},
                            "score": {"type": "number", "description": "匹配分数 0-100"},
                            "reason": {"type": "string", "description": "匹配原因"},
                        },
                        "required": ["company_id", "score", "reason"],
                    },
                }
            },
            "required": ["matches"],
        },
    },
    "generate_companies": {
        "description": "根据招商需求推荐候选企业",
        "parameters": {
            "type": "object",
            "properties": {
                "companies": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": COMPANY_PROPERTIES,
                        "required": ["name", "city", "industry", "last_round", "match_score", "match_reason"],
                    },
                }
            },
            "required": ["companies"],
        },
    },
    "analyze_company": {
        "description": "分析公司与用户需求的匹配度，提供投资建议",
        "parameters": {
            "type": "object",
            "properties": {
                "alignment_points": _string_array("匹配点"),
                "risks": _string_array("潜在风险"),
                "venue_recommendation": {"type": "string", "description": "适用场景建议"},
                "recommendation": {
                    "type": "string",
                    "enum": ["推荐", "谨慎推荐", "不推荐"],
                    "description": "最终建议",
                },
                "recommendation_rationale": {"type": "string", "description": "建议理由"},
            },
            "required": [
                "alignment_points",
                "risks",
                "venue_recommendation",
                "recommendation",
                "recommendation_rationale",
            ],
        },
    },
    "assess_company": {
        "description": "站在地方政府视角输出企业招商评估报告",
        "parameters": {
            "type": "object",
            "properties": {
                "companyProfile": {
                    "type": "object",
                    "properties": {
                        "industryStage": {"type": "string", "description": "所处行业阶段"},
                        "coreTechnology": {"type": "string", "description": "技术/产品核心竞争点"},
                        "developmentStage": {"type": "string", "description": "当前发展阶段"},
                        "summary": {"type": "string", "description": "300字以内总结"},
                    },
                },
                "landingAssessment": {
                    "type": "object",
                    "properties": {
                        "credibilityLevel": {"type": "string", "enum": ["高可信", "中等可信", "存疑"]},
                        "strategicAlignment": {"type": "string"},
                        "irreplaceability": {"type": "string"},
                        "inputOutputLogic": {"type": "string"},
                        "keyEvidence": _string_array("关键判断依据"),
                    },
                },
                "industryMatch": {
                    "type": "object",
                    "properties": {
                        "matchLevel": {"type": "string", "enum": ["高度匹配", "匹配", "一般", "不匹配"]},
                        "dominantIndustryFit": {"type": "string"},
                        "chainEffect": {"type": "string", "description": "补链/强链/延链作用"},
                        "clusterPotential": {"type": "string"},
                    },
                },
                "coreValue": {
                    "type": "object",
                    "properties": {
                        "industryValue": {"type": "string"},
                        "economicValue": {"type": "string"},
                        "strategicValue": {"type": "string"},
                    },
                },
                "riskAssessment": {
                    "type": "object",
                    "properties": {
                        "financialRisk": _risk_item("财务风险"),
                        "businessRisk": _risk_item("经营风险"),
                        "competitionRisk": _risk_item("竞争风险"),
                        "policyRisk": _risk_item("政策风险"),
                    },
                },
                "introductionStrategy": {
                    "type": "object",
                    "properties": {
                        "recommendIntroduce": {"type": "string", "enum": ["是", "谨慎", "不建议"]},
                        "recommendedForm": {"type": "string"},
                        "policyPriority": _string_array("政策支持优先级"),
                        "notRecommendedPolicy": _string_array("不建议给予的政策"),
                    },
                },
                "negotiationTerms": _string_array("5条核心谈判条款"),
                "conclusion": {
                    "type": "object",
                    "properties": {
                        "projectType": {"type": "string"},
                        "overallRating": {"type": "integer", "minimum": 1, "maximum": 5},
                        "recommendedAction": {"type": "string"},
                        "biggestOpportunity": {"type": "string"},
                        "biggestRisk": {"type": "string"},
                    },
                },
                "insufficientInfo": _string_array("需补充信息的字段列表"),
            },
            "required": ["companyProfile", "landingAssessment", "industryMatch", "conclusion"],
        },
    },
    "return_news": {
        "description": "返回新闻列表",
        "parameters": {
            "type": "object",
            "properties": {
                "news": {
                    "type": "array",
                    "maxItems": 10,
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {"type": "string", "description": "新闻标题"},
                            "company": {"type": "string", "description": "公司名称"},
                            "industry": {"type": "string", "description": "行业"},
                            "category": {
                                "type": "string",
                                "description": "分类：tech/healthcare/energy/consumer/enterprise",
                            },
                            "amount": {"type": "string", "description": "融资金额"},
                            "investors": {"type": "string", "description": "投资方"},
                            "publishDate": {"type": "string", "description": "发布日期 YYYY-MM-DD"},
                            "content": {"type": "string", "description": "新闻内容，60-80字"},
                        },
                        "required": [
                            "title",
                            "company",
                            "industry",
                            "category",
                            "amount",
                            "investors",
                            "publishDate",
                            "content",
                        ],
                    },
                }
            },
            "required": ["news"],
        },
    },
}


def get_tool(name: str) -> Dict:
    """Return the OpenAI-style function declaration for one of TOOLS."""
    declaration = TOOLS[name]
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": declaration["description"],
            "parameters": declaration["parameters"],
        },
    }


def _dump(value) -> str:
    return json.dumps(value, ensure_ascii=False, indent=2)


def get_requirement_prompt(requirement_text: str) -> str:
    return REQUIREMENT_ANALYSIS_PROMPT.format(requirement_text=requirement_text)


def get_matching_prompt(profile: Dict, candidates: List[Dict]) -> str:
    fields = [
        "id", "name", "city", "province", "industry", "track", "last_round",
        "last_round_date", "investors", "business_summary", "growth_stage", "tags",
    ]
    slim = [{key: company.get(key) for key in fields} for company in candidates]
    return COMPANY_MATCHING_PROMPT.format(
        requirement_profile=_dump(profile),
        candidate_companies=_dump(slim),
    )


def get_generation_prompt(requirement_text: str, profile: Dict, count: int = 10) -> str:
    return COMPANY_GENERATION_PROMPT.format(
        count=count,
        requirement_text=requirement_text,
        requirement_profile=_dump(profile),
    )


def get_analysis_prompt(requirement_text: str, company: Dict) -> str:
    return COMPANY_ANALYSIS_PROMPT.format(requirement_text=requirement_text, company=_dump(company))


def get_assessment_prompt(requirement_text: str, company: Dict) -> str:
    return GOVERNMENT_ASSESSMENT_PROMPT.format(requirement_text=requirement_text, company=_dump(company))


def get_news_prompt(today: Optional[date] = None) -> str:
    """System prompt for the daily news batch, pinned to the current date."""
    today = today or date.today()
    current_date = today.isoformat()
    year, month = today.year, today.month
    return f"""你是投资资讯推荐引擎，专注于中国创投市场的最新动态。

当前日期是：{current_date}（{year}年{month}月）

你的任务是推荐{year}年{month}月最近一周内真实发生的投资融资或行业重要新闻。

要求：
1. 新闻必须是{year}年{month}月真实发生的事件，日期必须在{current_date}之前的7天内
2. 新闻必须真实可信，来源于权威媒体（36氪、投资界、钛媒体、界面新闻、澎湃科技等）
3. 标题必须包含具体公司名称或具体行业事件
4. 内容要完整详实（60-80字），包含融资金额、投资方、公司业务简介
5. 类型可包括：融资、并购、IPO、政策、行业动态
6. 返回10条不同的新闻，按发布时间从最近到最远排序

重要：所有新闻的publishDate必须是{year}年{month}月的日期，不要返回往年的旧闻！"""


def get_news_batch_messages(batch: int, today: Optional[date] = None) -> List[Dict]:
    user_prompt = (
        "请推荐最近一周的10条投资融资新闻。"
        if batch == 0
        else "请推荐另外10条不同的投资融资新闻，不要与之前的重复。"
    )
    return [
        {"role": "system", "content": get_news_prompt(today)},
        {"role": "user", "content": user_prompt},
    ]
