"""
Requirement analysis, company matching and company assessment.

Every public function here first asks the LLM and then falls back to the local
heuristics in requirement_parser, matcher and assessment, so callers always
get a usable result.
"""
import logging
from typing import Dict, List, Optional

from assessment import generate_local_analysis, generate_local_assessment
from config import TOP_N_RESULTS
from fallback_data import get_companies
from llm_service import LLMError, query_tool
from matcher import match_companies_locally, pre_filter_companies, score_company, sort_matches
from normalizer import (
    coerce_analysis,
    coerce_assessment,
    coerce_generated,
    coerce_matches,
    coerce_profile,
    merge_profiles,
    profile_is_empty,
)
from prompts import (
    get_analysis_prompt,
    get_assessment_prompt,
    get_generation_prompt,
    get_matching_prompt,
    get_requirement_prompt,
)
from requirement_parser import parse_requirement_locally

logger = logging.getLogger(__name__)


def analyze_requirement(requirement_text: str, provider: Optional[str] = None, client=None) -> Dict:
    local_profile = parse_requirement_locally(requirement_text)
    try:
        result = query_tool(get_requirement_prompt(requirement_text), "parse_requirement", provider, client)
    except LLMError as e:
        logger.warning(f"Requirement parsing fell back to keywords: {str(e)}")
        return local_profile

    profile = coerce_profile(result["arguments"])
    if profile_is_empty(profile):
        logger.warning("LLM returned an empty requirement profile, using keyword parse")
        return local_profile
    return merge_profiles(profile, local_profile)


def match_companies(profile: Dict, companies: List[Dict], provider: Optional[str] = None, client=None) -> List[Dict]:
    candidates = pre_filter_companies(profile, companies)
    if not candidates:
        return []

    try:
        result = query_tool(get_matching_prompt(profile, candidates), "match_companies", provider, client)
    except LLMError as e:
        logger.warning(f"Company matching fell back to local scoring: {str(e)}")
        return match_companies_locally(profile, candidates)

    matches = coerce_matches(result["arguments"], result["raw"], candidates)
    if not matches:
        logger.warning("LLM returned no usable matches, using local scoring")
        return match_companies_locally(profile, candidates)

    # Candidates the model skipped still get a local score
    scored = {match["company_id"] for match in matches}
    missing = [company for company in candidates if company["id"] not in scored]
    if missing:
        logger.info(f"Scoring {len(missing)} companies the LLM skipped")
        matches.extend(score_company(profile, company) for company in missing)
    return sort_matches(matches)


def generate_companies(
    profile: Dict,
    requirement_text: str,
    count: int = TOP_N_RESULTS,
    provider: Optional[str] = None,
    client=None,
) -> List[Dict]:
    """Ask the LLM for fresh candidate companies; match the static list if that fails."""
    try:
        result = query_tool(get_generation_prompt(requirement_text, profile, count), "generate_companies", provider, client)
        matches = coerce_generated(result["arguments"], result["raw"])
    except LLMError as e:
        logger.warning(f"Company generation failed: {str(e)}")
        matches = []

    if not matches:
        logger.warning("No generated companies, matching the built-in company list")
        return match_companies(profile, get_companies(), provider, client)
    return sort_matches(matches)


def search(
    requirement_text: str,
    companies: Optional[List[Dict]] = None,
    live: bool = False,
    top_n: int = TOP_N_RESULTS,
    provider: Optional[str] = None,
    client=None,
) -> Dict:
    """Full flow: parse the requirement, then match (or generate) the top candidates."""
    profile = analyze_requirement(requirement_text, provider, client)
    if live:
        matched = generate_companies(profile, requirement_text, top_n, provider, client)
    else:
        matched = match_companies(profile, companies if companies is not None else get_companies(), provider, client)
    logger.info(f"Found {len(matched)} companies for requirement")
    return {"profile": profile, "matches": matched[:top_n], "total": len(matched)}


def analyze_company(requirement_text: str, company: Dict, provider: Optional[str] = None, client=None) -> Dict:
    base = generate_local_analysis(requirement_text, company)
    try:
        result = query_tool(get_analysis_prompt(requirement_text, company), "analyze_company", provider, client)
    except LLMError as e:
        logger.warning(f"Company analysis fell back to local rules: {str(e)}")
        return base
    return coerce_analysis(result["arguments"], base)


def assess_company(
    requirement_text: str,
    company: Dict,
    match: Optional[Dict] = None,
    provider: Optional[str] = None,
    client=None,
) -> Dict:
    base = generate_local_assessment(requirement_text, company, match)
    try:
        result = query_tool(get_assessment_prompt(requirement_text, company), "assess_company", provider, client)
    except LLMError as e:
        logger.warning(f"Government assessment fell back to local report: {str(e)}")
        return base
    if not isinstance(result["arguments"], dict):
        logger.warning("Assessment output could not be parsed, using local report")
        return base
    return coerce_assessment(result["arguments"], base)
