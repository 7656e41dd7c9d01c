"""Heuristic pre-filter and scoring over a company list."""
import logging
import re
from datetime import date
from typing import Dict, List, Optional

from config import DEFAULT_TIME_WINDOW_YEAR
from requirement_parser import RECENT_YEARS_RE, years_in

logger = logging.getLogger(__name__)

TOP_INVESTORS = ["红杉", "高瓴", "IDG", "经纬", "启明", "顺为", "真格", "北极光", "深创投", "腾讯", "阿里"]

SINCE_WINDOW_RE = re.compile(r"(\d{4})年")


def region_matches(profile: Dict, company: Dict) -> bool:
    city, province = company.get("city", ""), company.get("province", "")
    for region in profile["region_preference"]:
        if city and (region in city or city in region):
            return True
        if province and region in province:
            return True
    return False


def _industry_hit(preference: str, company: Dict) -> bool:
    wanted = preference.lower()
    for industry in company.get("industry", []):
        have = industry.lower()
        if have and (wanted in have or have in wanted):
            return True
    return wanted in company.get("track", "").lower()


def matching_industries(profile: Dict, company: Dict) -> List[str]:
    return [preference for preference in profile["industry_preference"] if _industry_hit(preference, company)]


def stage_matches(profile: Dict, company: Dict) -> bool:
    last_round = company.get("last_round", "")
    if not last_round:
        return False
    round_core = last_round.replace("轮", "", 1)
    for stage in profile["stage_preference"]:
        if stage.replace("轮", "", 1) in last_round or round_core in stage:
            return True
    return False


def has_top_investor(company: Dict, top_investors: Optional[List[str]] = None) -> bool:
    top_investors = top_investors or TOP_INVESTORS
    return any(top in investor for investor in company.get("investors", []) for top in top_investors)


def window_start_year(time_window: str, today: Optional[date] = None) -> int:
    """First year covered by a time window such as 近2年内, 过去两年 or 2023年以后."""
    today = today or date.today()
    match = RECENT_YEARS_RE.search(time_window)
    if match:
        return today.year - years_in(match.group(1))
    match = SINCE_WINDOW_RE.search(time_window)
    if match:
        return int(match.group(1))
    return DEFAULT_TIME_WINDOW_YEAR


def round_year(company: Dict) -> Optional[int]:
    found = re.match(r"(\d{4})", company.get("last_round_date", ""))
    return int(found.group(1)) if found else None


def pre_filter_companies(profile: Dict, companies: List[Dict]) -> List[Dict]:
    """Keep companies meeting at least max(1, 30%) of the active region/industry/stage criteria."""
    checks = []
    if profile["region_preference"]:
        checks.append(region_matches)
    if profile["industry_preference"]:
        checks.append(lambda p, c: bool(matching_industries(p, c)))
    if profile["stage_preference"]:
        checks.append(stage_matches)
    if not checks:
        return list(companies)

    threshold = max(1, len(checks) * 0.3)
    candidates = [
        company for company in companies
        if sum(1 for check in checks if check(profile, company)) >= threshold
    ]
    logger.info(f"Pre-filter kept {len(candidates)} of {len(companies)} companies")
    return candidates


def score_company(profile: Dict, company: Dict, today: Optional[date] = None) -> Dict:
    score = 0
    reasons = []

    # Region (30)
    if profile["region_preference"]:
        if region_matches(profile, company):
            score += 30
            reasons.append(f"地域匹配（{company['city']}）")
    else:
        score += 15

    # Industry (30)
    if profile["industry_preference"]:
        hits = matching_industries(profile, company)
        if hits:
            score += min(30, len(hits) * 15)
            reasons.append(f"赛道匹配（{company['track']}）")
    else:
        score += 15

    # Stage (20)
    if profile["stage_preference"]:
        if stage_matches(profile, company):
            score += 20
            reasons.append(f"融资阶段符合（{company['last_round']}）")
    else:
        score += 10

    # Extras (20)
    extras = profile["extra_preferences"]
    if extras:
        if any("头部" in p or "投资" in p for p in extras) and has_top_investor(company):
            score += 10
            reasons.append("头部基金背书")
        if any("扩张" in p or "增长" in p for p in extras) and company.get("growth_stage") == "快速增长":
            score += 10
            reasons.append("处于快速增长期")
    else:
        score += 10

    if profile["time_window"]:
        year = round_year(company)
        if year is not None and year >= window_start_year(profile["time_window"], today):
            score += 5

    return {
        "company_id": company["id"],
        "match_score": min(100, max(0, score)),
        "match_reason": "；".join(reasons) if reasons else "基本符合招商需求",
        "company": company,
        "source": "local",
    }


def sort_matches(matches: List[Dict]) -> List[Dict]:
    return sorted(matches, key=lambda match: match["match_score"], reverse=True)


def match_companies_locally(profile: Dict, companies: List[Dict], today: Optional[date] = None) -> List[Dict]:
    return sort_matches([score_company(profile, company, today) for company in companies])
