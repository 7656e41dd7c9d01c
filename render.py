"""HTML fragments for the Streamlit page. No decisions here beyond styling by value."""
import html
from datetime import date
from typing import Dict, List, Optional, Tuple

from news_service import relative_date

CSS = """
<style>
  .zs-badge { display:inline-block; padding:2px 10px; margin:2px 4px 2px 0; border-radius:999px;
              font-size:0.8rem; background:#f1f5f9; color:#334155; }
  .zs-badge.outline { background:transparent; border:1px solid #cbd5e1; }
  .zs-green { background:#dcfce7; color:#166534; }
  .zs-amber { background:#fef3c7; color:#92400e; }
  .zs-red { background:#fee2e2; color:#991b1b; }
  .zs-blue { background:#dbeafe; color:#1e40af; }
  .zs-muted { background:#f1f5f9; color:#64748b; }
  .zs-panel { border:1px solid #e2e8f0; border-radius:12px; padding:14px 16px; margin-bottom:12px; }
  .zs-panel h4 { margin:0 0 8px 0; font-size:1rem; }
  .zs-label { color:#64748b; font-size:0.8rem; }
  .zs-score { font-size:1.6rem; font-weight:700; }
  .zs-score.high { color:#16a34a; } .zs-score.mid { color:#d97706; } .zs-score.low { color:#64748b; }
  .zs-stars { color:#f59e0b; letter-spacing:2px; }
  .zs-row { display:flex; flex-wrap:wrap; align-items:center; gap:6px; margin-bottom:6px; }
</style>
"""

RECOMMENDATION_STYLES = {"推荐": "zs-green", "谨慎推荐": "zs-amber", "不推荐": "zs-red"}
CREDIBILITY_STYLES = {"高可信": "zs-green", "中等可信": "zs-amber", "存疑": "zs-red"}
MATCH_LEVEL_STYLES = {"高度匹配": "zs-green", "匹配": "zs-blue", "一般": "zs-amber", "不匹配": "zs-red"}
INTRODUCE_STYLES = {"是": "zs-green", "谨慎": "zs-amber", "不建议": "zs-red"}

PROFILE_ROWS = [
    ("region_preference", "目标地域"),
    ("industry_preference", "行业/赛道"),
    ("stage_preference", "关注阶段"),
    ("time_window", "时间范围"),
    ("extra_preferences", "优先条件"),
    ("scenario", "适配场景"),
]

RISK_LABELS = [
    ("financialRisk", "财务风险"),
    ("businessRisk", "经营风险"),
    ("competitionRisk", "竞争风险"),
    ("policyRisk", "政策风险"),
]


def esc(value) -> str:
    return html.escape(str(value if value is not None else ""))


def badge(text, style: str = "") -> str:
    return f'<span class="zs-badge {style}">{esc(text)}</span>'


def score_band(score: int) -> str:
    if score >= 80:
        return "high"
    if score >= 60:
        return "mid"
    return "low"


def stars(rating: int) -> str:
    rating = max(1, min(5, int(rating)))
    return f'<span class="zs-stars">{"★" * rating}{"☆" * (5 - rating)}</span>'


def bullet_list(items: List[str]) -> str:
    if not items:
        return '<p class="zs-label">暂无</p>'
    return "<ul>" + "".join(f"<li>{esc(item)}</li>" for item in items) + "</ul>"


def field(label: str, value) -> str:
    return f'<div><span class="zs-label">{esc(label)}</span><br>{esc(value)}</div>'


def render_profile(profile: Dict) -> str:
    """Parsed filter chips; empty string when nothing was extracted."""
    rows = []
    for key, label in PROFILE_ROWS:
        value = profile.get(key)
        if not value:
            continue
        values = value if isinstance(value, list) else [value]
        style = "outline" if key in ("time_window", "scenario", "extra_preferences") else ""
        chips = "".join(badge(item, style) for item in values)
        rows.append(f'<div class="zs-row"><span class="zs-label">{label}</span>{chips}</div>')
    if not rows:
        return ""
    return '<div class="zs-panel"><h4>AI 解析的筛选条件</h4>' + "".join(rows) + "</div>"


def render_company_card(match: Dict) -> str:
    company = match["company"]
    score = match["match_score"]
    industries = "".join(badge(item, "outline") for item in company.get("industry", []))
    track = badge(company.get("track", ""), "zs-blue") if company.get("track") else ""
    source = "" if match.get("source") != "local" else badge("本地匹配", "zs-muted")
    return (
        '<div class="zs-panel">'
        f'<div class="zs-row"><strong>{esc(company["name"])}</strong>{badge(company.get("last_round", ""))}{source}'
        f'<span style="margin-left:auto" class="zs-score {score_band(score)}">{score}</span></div>'
        f'<div class="zs-label">{esc(company.get("city", ""))} · {esc(company.get("last_round_date", "")[:7])} · '
        f'{esc(company.get("growth_stage", ""))}</div>'
        f'<div class="zs-row">{industries}{track}</div>'
        f'<div>{esc(match["match_reason"])}</div>'
        "</div>"
    )


def render_analysis(analysis: Dict) -> str:
    recommendation = analysis["recommendation"]
    style = RECOMMENDATION_STYLES.get(recommendation, "zs-muted")
    return (
        '<div class="zs-panel"><h4>AI 招商分析</h4>'
        f'<div class="zs-label">匹配亮点</div>{bullet_list(analysis["matchPoints"])}'
        f'<div class="zs-label">风险提示</div>{bullet_list(analysis["risks"])}'
        f'{field("适配载体", analysis["suitableVenue"])}'
        f'<div class="zs-row" style="margin-top:8px"><span class="zs-label">综合建议</span>{badge(recommendation, style)}</div>'
        f'<div>{esc(analysis["recommendationReason"])}</div>'
        "</div>"
    )


def _company_basics(company: Dict, match: Optional[Dict]) -> str:
    investors = "".join(badge(item, "outline") for item in company.get("investors", []))
    tags = "".join(badge(item, "outline") for item in company.get("tags", []))
    score = ""
    if match:
        label = "匹配度 %s%%" % match["match_score"]
        score = (
            f'<div class="zs-row">{badge(label, "zs-blue")}'
            f'<span class="zs-label">{esc(match["match_reason"])}</span></div>'
        )
    return (
        score
        + f'<div class="zs-label">{esc(company.get("city", ""))}，{esc(company.get("province", ""))} · '
        f'成立于 {esc(company.get("register_year") or "未知")} 年</div>'
        + f'<p>{esc(company.get("business_summary", ""))}</p>'
        + field("最新融资", f'{company.get("last_round", "")} · {company.get("last_round_date", "")} · '
                           f'{company.get("last_round_amount", "")}')
        + f'<div class="zs-row"><span class="zs-label">投资方</span>{investors}</div>'
        + (f'<div class="zs-row"><span class="zs-label">标签</span>{tags}</div>' if tags else "")
        + (field("相关动态", f'{company.get("headline", "")} {company.get("news_snippet", "")}'.strip())
           if company.get("headline") or company.get("news_snippet") else "")
    )


def render_report(company: Dict, assessment: Dict, match: Optional[Dict] = None) -> List[Tuple[str, str]]:
    """The assessment as ten (title, html) panels, in display order."""
    profile = assessment["companyProfile"]
    landing = assessment["landingAssessment"]
    industry = assessment["industryMatch"]
    value = assessment["coreValue"]
    risks = assessment["riskAssessment"]
    strategy = assessment["introductionStrategy"]
    conclusion = assessment["conclusion"]

    risk_rows = "".join(
        f'<div style="margin-bottom:6px">{badge(label, "zs-amber")}'
        f'<div>{field("风险来源", risks[key]["source"])}{field("对地方影响", risks[key]["localImpact"])}</div></div>'
        for key, label in RISK_LABELS
    )
    insufficient = assessment.get("insufficientInfo") or []

    panels = [
        ("企业基本信息", _company_basics(company, match)),
        ("一、企业综合画像",
         field("所处行业阶段", profile["industryStage"]) + field("核心竞争点", profile["coreTechnology"])
         + field("当前发展阶段", profile["developmentStage"]) + f'<p>{esc(profile["summary"])}</p>'),
        ("二、项目真实性与落地判断",
         f'<div class="zs-row">{badge(landing["credibilityLevel"], CREDIBILITY_STYLES.get(landing["credibilityLevel"], "zs-muted"))}</div>'
         + field("与企业战略一致性", landing["strategicAlignment"]) + field("不可替代性", landing["irreplaceability"])
         + field("投入产出逻辑", landing["inputOutputLogic"])
         + '<div class="zs-label">关键判断依据</div>' + bullet_list(landing["keyEvidence"])),
        ("三、与地方产业匹配度",
         f'<div class="zs-row">{badge(industry["matchLevel"], MATCH_LEVEL_STYLES.get(industry["matchLevel"], "zs-muted"))}</div>'
         + field("主导产业契合度", industry["dominantIndustryFit"]) + field("补链/强链/延链作用", industry["chainEffect"])
         + field("集聚与示范潜力", industry["clusterPotential"])),
        ("四、可为地方带来的核心价值",
         field("产业价值", value["industryValue"]) + field("经济价值", value["economicValue"])
         + field("战略价值", value["strategicValue"])),
        ("五、主要风险识别", risk_rows),
        ("六、政府引入策略建议",
         f'<div class="zs-row"><span class="zs-label">是否建议引入</span>'
         f'{badge(strategy["recommendIntroduce"], INTRODUCE_STYLES.get(strategy["recommendIntroduce"], "zs-muted"))}</div>'
         + field("建议引入形式", strategy["recommendedForm"])
         + '<div class="zs-label">政策支持优先级</div>' + bullet_list(strategy["policyPriority"])
         + '<div class="zs-label">不建议给予的政策</div>' + bullet_list(strategy["notRecommendedPolicy"])),
        ("七、招商谈判关键条款",
         "<ol>" + "".join(f"<li>{esc(term)}</li>" for term in assessment["negotiationTerms"]) + "</ol>"),
        ("八、综合结论",
         f'<div class="zs-row">{stars(conclusion["overallRating"])}{badge(conclusion["projectType"], "outline")}</div>'
         + field("推荐动作", conclusion["recommendedAction"]) + field("最大机会点", conclusion["biggestOpportunity"])
         + field("最大风险点", conclusion["biggestRisk"])),
        ("信息不足标注",
         ('<p class="zs-label">以下信息需补充核实：</p>'
          + "".join(badge(item, "zs-muted") for item in insufficient))
         if insufficient else '<p class="zs-label">关键信息完整</p>'),
    ]
    return panels


def render_news_item(item: Dict, today: Optional[date] = None) -> str:
    return (
        '<div class="zs-panel">'
        f'<strong>{esc(item["title"])}</strong>'
        f'<p>{esc(item["content"])}</p>'
        f'<div class="zs-label">{esc(item.get("category", ""))} · {esc(item.get("company", ""))} · '
        f'{esc(item.get("amount", ""))} · {esc(relative_date(item.get("publishDate", ""), today))}</div>'
        "</div>"
    )
