"""Canned company analysis and government assessment built from company attributes."""
from typing import Dict, List, Optional

from matcher import TOP_INVESTORS, has_top_investor

ANALYSIS_TOP_INVESTORS = ["红杉", "高瓴", "IDG", "经纬", "启明", "顺为", "腾讯", "阿里", "小米"]

MANUFACTURING = {"智能制造", "机器人", "新能源", "新材料", "芯片", "半导体"}
LIFE_SCIENCE = {"生物医药", "医疗健康", "基因", "医疗"}
DIGITAL = {"AI", "云计算", "大数据", "SaaS", "人工智能"}


def industry_family(company: Dict) -> str:
    industries = set(company.get("industry", []))
    if industries & MANUFACTURING:
        return "manufacturing"
    if industries & LIFE_SCIENCE:
        return "life_science"
    if industries & DIGITAL:
        return "digital"
    return "other"


def _is_early_round(company: Dict) -> bool:
    last_round = company.get("last_round", "")
    return "天使" in last_round or "Pre" in last_round


def _in_trials(company: Dict) -> bool:
    return any("临床" in tag or "试验" in tag for tag in company.get("tags", []))


VENUES = {
    "manufacturing": "适合入驻产业园区或智能制造基地，需考虑生产厂房需求",
    "life_science": "适合入驻生物医药产业园或研发型载体，需配套实验室设施",
    "digital": "适合入驻科技创新园区或甲级写字楼，侧重办公研发空间",
    "other": "建议根据企业实际业务需求匹配合适的产业载体",
}


def generate_local_analysis(requirement_text: str, company: Dict) -> Dict:
    match_points = []
    risks = []

    if company.get("growth_stage") == "快速增长":
        match_points.append("公司处于快速增长阶段，发展势头良好")
    if has_top_investor(company, ANALYSIS_TOP_INVESTORS):
        match_points.append(f"获得头部投资机构背书（{'、'.join(company['investors'][:2])}）")
    if company.get("tags"):
        match_points.append(f"具备差异化优势：{'、'.join(company['tags'][:2])}")
    if not match_points:
        match_points.append(f"在{company.get('track', '')}赛道有明确定位")
        match_points.append(f"已完成{company.get('last_round', '')}融资，具备一定资金实力")

    if company.get("growth_stage") == "早期":
        risks.append("公司处于早期阶段，商业模式尚未完全验证")
    elif _is_early_round(company):
        risks.append("融资轮次较早，后续融资存在不确定性")
    if _in_trials(company):
        risks.append("产品处于研发/试验阶段，商业化周期较长")
    if not risks:
        risks.append("需关注行业竞争态势及市场变化")

    stage = company.get("growth_stage")
    if stage == "快速增长" and has_top_investor(company, TOP_INVESTORS):
        recommendation, reason = "推荐", "公司发展势头良好，获头部资本认可，是优质招商目标"
    elif stage == "成熟期":
        recommendation, reason = "推荐", "公司已进入成熟期，业务稳定，适合作为园区标杆企业引进"
    elif stage == "早期":
        recommendation, reason = "谨慎推荐", "公司处于早期阶段，建议持续跟踪发展情况后再做决策"
    else:
        recommendation, reason = "推荐", "综合评估符合招商需求，建议进一步对接洽谈"

    return {
        "matchPoints": match_points,
        "risks": risks,
        "suitableVenue": VENUES[industry_family(company)],
        "recommendation": recommendation,
        "recommendationReason": reason,
    }


def overall_rating(company: Dict) -> int:
    rating = 3
    if has_top_investor(company, ANALYSIS_TOP_INVESTORS):
        rating += 1
    if company.get("growth_stage") in ("快速增长", "成熟期"):
        rating += 1
    if company.get("growth_stage") == "早期" or _is_early_round(company):
        rating -= 1
    if _in_trials(company):
        rating -= 1
    return max(1, min(5, rating))


def match_level(match_score: Optional[int]) -> str:
    if match_score is None:
        return "一般"
    if match_score >= 80:
        return "高度匹配"
    if match_score >= 60:
        return "匹配"
    if match_score >= 40:
        return "一般"
    return "不匹配"


def credibility_level(company: Dict) -> str:
    if company.get("growth_stage") == "早期" or _is_early_round(company):
        return "存疑"
    if company.get("growth_stage") in ("快速增长", "成熟期") and has_top_investor(company, ANALYSIS_TOP_INVESTORS):
        return "高可信"
    return "中等可信"


STRATEGY_BY_FAMILY = {
    "manufacturing": {
        "form": "生产基地或区域制造中心",
        "project_type": "制造业产能落地项目",
        "policy": ["标准厂房租金减免", "设备投资补贴", "产业链配套对接"],
        "chain": "可补齐本地装备与核心零部件环节，带动上下游配套企业集聚",
        "economic": "达产后可形成稳定产值和税收，并提供较多制造业就业岗位",
    },
    "life_science": {
        "form": "研发中心与中试基地",
        "project_type": "研发及中试转化项目",
        "policy": ["实验室及GMP车间代建", "临床与注册审批服务", "高层次人才引进补贴"],
        "chain": "可延伸本地生物医药研发与服务外包环节，强化创新链",
        "economic": "短期税收贡献有限，中长期取决于产品获批与产业化进度",
    },
    "digital": {
        "form": "区域总部或研发中心",
        "project_type": "总部经济及研发项目",
        "policy": ["办公用房租金补贴", "应用场景开放", "研发投入奖励"],
        "chain": "可为本地传统产业提供数字化能力，起到强链作用",
        "economic": "以高端人才就业和服务性收入为主，税收随业务规模逐步释放",
    },
    "other": {
        "form": "区域分支机构",
        "project_type": "综合类招商项目",
        "policy": ["落地开办服务", "人才公寓配套"],
        "chain": "需结合本地主导产业进一步论证其补链价值",
        "economic": "经济贡献需根据实际落地规模测算",
    },
}

POLICY_RISKS = {
    "manufacturing": ("产业扶持政策与补贴标准调整", "用地及能耗指标占用后若产出不达预期，影响园区亩均效益"),
    "life_science": ("药械注册审批及医保政策变化", "产品上市节奏不确定，影响项目达产和税收兑现"),
    "digital": ("数据安全与行业监管政策趋严", "业务合规成本上升，可能影响在地团队规模"),
    "other": ("行业监管政策变化", "政策变化可能影响企业在地经营预期"),
}


def _insufficient_info(company: Dict) -> List[str]:
    missing = ["营收与利润数据", "拟落地投资额与用地需求"]
    if not company.get("investors"):
        missing.append("投资方信息")
    amount = company.get("last_round_amount", "")
    if not amount or "未披露" in amount:
        missing.append("最近一轮融资金额")
    if not company.get("register_year"):
        missing.append("成立年份")
    return missing


def generate_local_assessment(requirement_text: str, company: Dict, match: Optional[Dict] = None) -> Dict:
    """Deterministic government assessment used when the LLM report is unavailable."""
    family = industry_family(company)
    strategy = STRATEGY_BY_FAMILY[family]
    rating = overall_rating(company)
    investors = "、".join(company.get("investors", [])[:3]) or "未披露"
    track = company.get("track") or "、".join(company.get("industry", [])) or "所属赛道"
    stage = company.get("growth_stage") or "未知阶段"
    analysis = generate_local_analysis(requirement_text, company)

    summary = (
        f"{company.get('name', '')}成立于{company.get('register_year') or '未知'}年，位于{company.get('city', '')}，"
        f"专注{track}。{company.get('business_summary', '')}"
        f"最近一轮为{company.get('last_round_date', '')}完成的{company.get('last_round', '')}融资"
        f"（{company.get('last_round_amount') or '金额未披露'}），投资方包括{investors}。"
    )

    if _is_early_round(company) or stage == "早期":
        financial_source = "融资轮次较早，持续经营依赖后续融资"
        financial_impact = "若后续融资不及预期，可能出现落地项目延期或缩减"
    else:
        financial_source = f"{company.get('last_round', '')}后估值与扩张节奏较快，现金流压力需关注"
        financial_impact = "扩张不及预期时，在地投资可能分期或延后兑现"

    if _in_trials(company):
        business_source = "核心产品仍处于研发/试验阶段"
        business_impact = "商业化周期较长，短期内难以形成稳定产值"
    else:
        business_source = "客户集中度与订单持续性有待核实"
        business_impact = "订单波动将直接影响在地产能利用率和税收"

    policy_source, policy_impact = POLICY_RISKS[family]

    introduce = "是" if rating >= 4 else ("谨慎" if rating == 3 else "不建议")
    match_score = match.get("match_score") if match else None

    return {
        "companyProfile": {
            "industryStage": f"{track}处于技术驱动的成长期，资本关注度较高",
            "coreTechnology": "；".join(company.get("tags", [])[:3]) or company.get("business_summary", "")[:60],
            "developmentStage": f"{stage}（最近融资：{company.get('last_round', '未知')}）",
            "summary": summary[:300],
        },
        "landingAssessment": {
            "credibilityLevel": credibility_level(company),
            "strategicAlignment": f"企业处于{stage}，对外扩张与{strategy['form']}布局具有一定内在需求",
            "irreplaceability": f"在{track}领域具备一定先发优势，但同类企业可选项较多",
            "inputOutputLogic": "需结合企业拟投资额、用地需求与达产计划进一步测算投入产出",
            "keyEvidence": [
                f"最近一轮融资：{company.get('last_round', '')} {company.get('last_round_amount', '')}".strip(),
                f"投资方：{investors}",
                company.get("headline") or company.get("news_snippet") or "公开信息有限",
            ],
        },
        "industryMatch": {
            "matchLevel": match_level(match_score),
            "dominantIndustryFit": (
                match["match_reason"] if match else f"与招商需求中的赛道偏好存在一定契合：{track}"
            ),
            "chainEffect": strategy["chain"],
            "clusterPotential": "若引入成功，可作为细分领域标杆企业吸引同类企业集聚",
        },
        "coreValue": {
            "industryValue": f"引入{track}相关技术与品牌，提升本地产业技术水平",
            "economicValue": strategy["economic"],
            "strategicValue": "有助于提升区域在新兴产业领域的显示度和招商影响力",
        },
        "riskAssessment": {
            "financialRisk": {"source": financial_source, "localImpact": financial_impact},
            "businessRisk": {"source": business_source, "localImpact": business_impact},
            "competitionRisk": {
                "source": f"{track}赛道竞争者众多，技术路线尚未完全收敛",
                "localImpact": "企业竞争地位变化可能影响在地业务规模",
            },
            "policyRisk": {"source": policy_source, "localImpact": policy_impact},
        },
        "introductionStrategy": {
            "recommendIntroduce": introduce,
            "recommendedForm": strategy["form"],
            "policyPriority": list(strategy["policy"]),
            "notRecommendedPolicy": ["一次性大额现金奖励", "无考核条件的股权投资"],
        },
        "negotiationTerms": [
            "注册地及纳税主体落在本地，并约定最低经营年限",
            "明确投资强度与分期投资计划，设置达产时间节点",
            "约定年度税收与产值考核指标，未达标触发政策追偿",
            "本地招聘及研发团队规模承诺",
            "政策兑现与考核结果挂钩，分期拨付",
        ],
        "conclusion": {
            "projectType": strategy["project_type"],
            "overallRating": rating,
            "recommendedAction": {
                "是": "建议尽快安排高层对接，推进项目签约",
                "谨慎": "建议补充尽调材料后再决策，可先以轻资产形式落地",
                "不建议": "建议列入跟踪库，暂不投入政策资源",
            }[introduce],
            "biggestOpportunity": analysis["matchPoints"][0],
            "biggestRisk": analysis["risks"][0],
        },
        "insufficientInfo": _insufficient_info(company),
    }
