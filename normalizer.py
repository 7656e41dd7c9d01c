"""
Turn whatever an LLM sent back into the shapes the rest of the app expects.

Tool-call arguments arrive as a JSON string (OpenAI-compatible providers) or
an already-decoded object (ollama). They can also be missing, wrapped in
markdown, prefixed with reasoning, or cut off mid-array when the provider hits
its token limit. Every ``coerce_*`` function here accepts that mess and either
returns a well-formed value or falls back to the ``base`` it was given.
"""
import json
import logging
import math
import re
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

THINK_RE = re.compile(r"<think>.*?</think>", re.S)
FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.S)
FLAT_OBJECT_RE = re.compile(r"\{[^{}]*\}")
NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
BULLET_RE = re.compile(r"^\s*(?:[-*•·]|\d+[.、)）])\s*")

KEYWORD_SPLIT = r"[,，、/;；\n]+"
SENTENCE_SPLIT = r"[\n；;]+"

RECOMMENDATIONS = ("推荐", "谨慎推荐", "不推荐")
CREDIBILITY_LEVELS = ("高可信", "中等可信", "存疑")
MATCH_LEVELS = ("高度匹配", "匹配", "一般", "不匹配")
INTRODUCE_OPTIONS = ("是", "谨慎", "不建议")
NEWS_CATEGORIES = ("tech", "healthcare", "energy", "consumer", "enterprise")
NEWS_KEYS = ("title", "company", "industry", "category", "amount", "investors", "publishDate", "content")

DEFAULT_MATCH_REASON = "基本符合招商需求"

PROFILE_LIST_FIELDS = ("region_preference", "industry_preference", "stage_preference", "extra_preferences")
PROFILE_TEXT_FIELDS = ("time_window", "scenario")


def _loads(text: str) -> Optional[Any]:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None


def parse_json_text(text: Optional[str]) -> Optional[Any]:
    """Best-effort JSON decode of model output; None when every strategy fails."""
    if not text or not isinstance(text, str):
        return None
    text = THINK_RE.sub("", text)
    if "</think>" in text:
        text = text.split("</think>")[-1]
    text = text.strip()

    parsed = _loads(text)
    if parsed is not None:
        return parsed

    for block in FENCE_RE.findall(text):
        parsed = _loads(block.strip())
        if parsed is not None:
            return parsed

    # Outermost object or array, whichever opens first
    spans = []
    for opener, closer in (("{", "}"), ("[", "]")):
        start, end = text.find(opener), text.rfind(closer)
        if start != -1 and end > start:
            spans.append((start, end))
    for start, end in sorted(spans):
        parsed = _loads(text[start:end + 1])
        if parsed is not None:
            return parsed
    return None


def extract_tool_payload(response: Dict) -> Tuple[Optional[Any], str]:
    """
    Pull the function-call arguments out of a chat completion body.

    Falls back to the plain message content when the model ignored the tool.
    Returns ``(parsed, raw)``; ``parsed`` is None when ``raw`` is not valid
    JSON, e.g. because it was truncated.
    """
    choices = (response or {}).get("choices") or []
    message = (choices[0] or {}).get("message") or {} if choices else {}
    tool_calls = message.get("tool_calls") or []

    if tool_calls:
        arguments = (tool_calls[0].get("function") or {}).get("arguments")
        if isinstance(arguments, (dict, list)):
            return arguments, json.dumps(arguments, ensure_ascii=False)
        raw = arguments or ""
    else:
        raw = message.get("content") or ""
    return parse_json_text(raw), raw


def extract_complete_objects(text: Optional[str], required_keys: Iterable[str] = ()) -> List[Dict]:
    """Salvage every complete flat JSON object from a possibly truncated string."""
    items = []
    required_keys = tuple(required_keys)
    for match in FLAT_OBJECT_RE.findall(text or ""):
        item = _loads(match)
        if not isinstance(item, dict):
            logger.debug(f"Skipping unparseable fragment: {match[:80]}")
            continue
        if all(key in item for key in required_keys):
            items.append(item)
    return items


def items_from(arguments: Any, raw: str, key: str, required_keys: Iterable[str]) -> List[Dict]:
    """List under ``key`` (or a bare list); salvaged from ``raw`` if absent."""
    if isinstance(arguments, dict):
        items = arguments.get(key)
    elif isinstance(arguments, list):
        items = arguments
    else:
        items = None
    if not isinstance(items, list):
        items = extract_complete_objects(raw, required_keys)
        if items:
            logger.info(f"Salvaged {len(items)} '{key}' items from truncated output")
    return [item for item in items if isinstance(item, dict)]


def dedupe(items: Iterable) -> List:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def as_text(value: Any, default: str = "") -> str:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        return value.strip() or default
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return "、".join(as_string_list(value)) or default
    return default


def as_string_list(value: Any, pattern: str = KEYWORD_SPLIT) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        parts = re.split(pattern, value)
    elif isinstance(value, (list, tuple)):
        parts = [as_text(item) for item in value if not isinstance(item, (dict, list))]
    else:
        parts = [as_text(value)]
    cleaned = (BULLET_RE.sub("", part).strip() for part in parts)
    return dedupe(part for part in cleaned if part)


def clamp_score(value: Any, low: int = 0, high: int = 100) -> int:
    if isinstance(value, str):
        found = NUMBER_RE.search(value)
        value = found.group() if found else None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return low
    if math.isnan(number):
        return low
    return int(max(low, min(high, round(number))))


def coerce_profile(raw: Any) -> Dict:
    raw = raw if isinstance(raw, dict) else {}
    profile = {field: as_string_list(raw.get(field)) for field in PROFILE_LIST_FIELDS}
    profile.update({field: as_text(raw.get(field)) for field in PROFILE_TEXT_FIELDS})
    return profile


def profile_is_empty(profile: Dict) -> bool:
    return not any(profile.get(field) for field in PROFILE_LIST_FIELDS + PROFILE_TEXT_FIELDS)


def merge_profiles(primary: Dict, fallback: Dict) -> Dict:
    """Field-wise merge; empty fields of ``primary`` take ``fallback``'s value."""
    merged = {}
    for field in PROFILE_LIST_FIELDS + PROFILE_TEXT_FIELDS:
        merged[field] = primary.get(field) or fallback.get(field) or ([] if field in PROFILE_LIST_FIELDS else "")
    return merged


def coerce_matches(arguments: Any, raw: str, companies: List[Dict]) -> List[Dict]:
    """Match-list output -> MatchedCompany dicts for known candidates only."""
    by_id = {company["id"]: company for company in companies}
    matches = []
    seen = set()
    for item in items_from(arguments, raw, "matches", ["company_id"]):
        company_id = as_text(item.get("company_id") or item.get("id"))
        company = by_id.get(company_id)
        if company is None or company_id in seen:
            if company is None:
                logger.warning(f"LLM scored unknown company id '{company_id}', dropped")
            continue
        seen.add(company_id)
        score = item.get("score", item.get("match_score"))
        reason = as_text(item.get("reason") or item.get("match_reason"), DEFAULT_MATCH_REASON)
        matches.append({
            "company_id": company_id,
            "match_score": clamp_score(score),
            "match_reason": reason,
            "company": company,
            "source": "ai",
        })
    return matches


def coerce_company(raw: Dict, index: int = 0) -> Dict:
    register_year = raw.get("register_year")
    return {
        "id": as_text(raw.get("id"), f"ai_{index + 1:03d}"),
        "name": as_text(raw.get("name")),
        "city": as_text(raw.get("city")),
        "province": as_text(raw.get("province")),
        "industry": as_string_list(raw.get("industry")),
        "track": as_text(raw.get("track")),
        "register_year": clamp_score(register_year, 0, 9999) if register_year else 0,
        "last_round": as_text(raw.get("last_round")),
        "last_round_date": as_text(raw.get("last_round_date")),
        "last_round_amount": as_text(raw.get("last_round_amount"), "未披露"),
        "investors": as_string_list(raw.get("investors")),
        "headline": as_text(raw.get("headline")),
        "business_summary": as_text(raw.get("business_summary")),
        "news_snippet": as_text(raw.get("news_snippet")),
        "growth_stage": as_text(raw.get("growth_stage")),
        "tags": as_string_list(raw.get("tags")),
    }


def coerce_generated(arguments: Any, raw: str) -> List[Dict]:
    """Generated-company output -> MatchedCompany dicts; nameless rows dropped."""
    matches = []
    seen = set()
    used_ids = set()
    for index, item in enumerate(items_from(arguments, raw, "companies", ["name"])):
        company = coerce_company(item, index)
        if not company["name"] or company["name"] in seen:
            continue
        seen.add(company["name"])
        # Ids key UI widgets, so they must stay unique
        suffix = index + 1
        while company["id"] in used_ids:
            company["id"] = f"ai_{suffix:03d}"
            suffix += 1
        used_ids.add(company["id"])
        matches.append({
            "company_id": company["id"],
            "match_score": clamp_score(item.get("match_score", item.get("score"))),
            "match_reason": as_text(item.get("match_reason") or item.get("reason"), DEFAULT_MATCH_REASON),
            "company": company,
            "source": "ai",
        })
    return matches


def coerce_analysis(raw: Any, base: Dict) -> Dict:
    """Quick-analysis output merged over the locally generated ``base``."""
    raw = raw if isinstance(raw, dict) else {}
    points = raw.get("alignment_points") or raw.get("matchPoints") or raw.get("alignment_rationale")
    recommendation = as_text(raw.get("recommendation"))
    return {
        "matchPoints": as_string_list(points, SENTENCE_SPLIT) or base["matchPoints"],
        "risks": as_string_list(raw.get("risks"), SENTENCE_SPLIT) or base["risks"],
        "suitableVenue": as_text(raw.get("venue_recommendation") or raw.get("suitableVenue"), base["suitableVenue"]),
        "recommendation": recommendation if recommendation in RECOMMENDATIONS else base["recommendation"],
        "recommendationReason": as_text(
            raw.get("recommendation_rationale") or raw.get("recommendationReason"),
            base["recommendationReason"],
        ),
    }


def _merge(value: Any, default: Any) -> Any:
    if isinstance(default, dict):
        value = value if isinstance(value, dict) else {}
        return {key: _merge(value.get(key), sub) for key, sub in default.items()}
    if isinstance(default, list):
        return as_string_list(value, SENTENCE_SPLIT) or list(default)
    if isinstance(default, int) and not isinstance(default, bool):
        return clamp_score(value, 1, 5) if value not in (None, "") else default
    return as_text(value, default)


def _enum(value: str, allowed: Tuple[str, ...], default: str) -> str:
    return value if value in allowed else default


def coerce_assessment(raw: Any, base: Dict) -> Dict:
    """
    Deep-merge a government assessment over the canned ``base`` report.

    Missing or blank fields keep the base value, enum fields outside their
    allowed values fall back to the base, the rating is clamped to 1-5 and
    the negotiation terms are capped at five.
    """
    raw = raw if isinstance(raw, dict) else {}
    merged = _merge(raw, base)

    landing = merged["landingAssessment"]
    landing["credibilityLevel"] = _enum(
        landing["credibilityLevel"], CREDIBILITY_LEVELS, base["landingAssessment"]["credibilityLevel"])
    match = merged["industryMatch"]
    match["matchLevel"] = _enum(match["matchLevel"], MATCH_LEVELS, base["industryMatch"]["matchLevel"])
    strategy = merged["introductionStrategy"]
    strategy["recommendIntroduce"] = _enum(
        strategy["recommendIntroduce"], INTRODUCE_OPTIONS, base["introductionStrategy"]["recommendIntroduce"])

    merged["negotiationTerms"] = merged["negotiationTerms"][:5]
    # An explicit empty list from the model means nothing is missing
    if isinstance(raw.get("insufficientInfo"), list):
        merged["insufficientInfo"] = as_string_list(raw["insufficientInfo"], SENTENCE_SPLIT)

    filled = [key for key in base if key not in raw]
    if raw and filled:
        logger.info(f"Assessment modules filled from local report: {filled}")
    return merged


def _news_category(item: Dict) -> str:
    category = as_text(item.get("category")).lower()
    if category in NEWS_CATEGORIES:
        return category
    industry = as_text(item.get("industry"))
    if any(word in industry for word in ("医", "健康", "生物")):
        return "healthcare"
    if any(word in industry for word in ("能源", "储能", "电池", "光伏", "氢")):
        return "energy"
    if any(word in industry for word in ("消费", "零售", "食品", "电商")):
        return "consumer"
    if any(word in industry for word in ("企业服务", "SaaS", "云")):
        return "enterprise"
    return "tech"


def coerce_news_items(arguments: Any, raw: str, today: Optional[date] = None) -> List[Dict]:
    """News tool output -> NewsItem dicts; items without title/company/content dropped."""
    today = today or date.today()
    news = []
    for item in items_from(arguments, raw, "news", NEWS_KEYS):
        title = as_text(item.get("title"))
        company = as_text(item.get("company"))
        content = as_text(item.get("content"))
        if not (title and company and content):
            continue
        publish_date = as_text(item.get("publishDate"))
        news.append({
            "title": title,
            "company": company,
            "industry": as_text(item.get("industry")),
            "category": _news_category(item),
            "amount": as_text(item.get("amount"), "未披露"),
            "investors": as_text(item.get("investors"), "未披露"),
            "publishDate": publish_date if DATE_RE.match(publish_date) else today.isoformat(),
            "content": content,
        })
    return news
