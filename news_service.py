import logging
import time
from datetime import date, timedelta
from typing import Dict, List, Optional

from supabase import create_client

from config import (
    NEWS_BATCH_DELAY,
    NEWS_BATCHES,
    NEWS_LLM_PROVIDER,
    NEWS_RETENTION_DAYS,
    NEWS_TABLE,
    SUPABASE_KEY,
    SUPABASE_URL,
)
from fallback_data import get_fallback_news
from llm_service import LLMError, query_tool
from normalizer import coerce_news_items
from prompts import get_news_batch_messages

logger = logging.getLogger(__name__)


class NewsFetchError(Exception):
    pass


def get_supabase_client():
    if not SUPABASE_URL or not SUPABASE_KEY:
        raise ValueError("Supabase credentials not found in environment variables")
    return create_client(SUPABASE_URL, SUPABASE_KEY)


def fetch_news_from_ai(
    batches: int = NEWS_BATCHES,
    today: Optional[date] = None,
    provider: Optional[str] = None,
    client=None,
    delay: float = NEWS_BATCH_DELAY,
) -> List[Dict]:
    """Fetch news in batches of ten; a failed batch is logged and skipped."""
    all_news = []
    seen_titles = set()
    for batch in range(batches):
        logger.info(f"Fetching batch {batch + 1}...")
        try:
            result = query_tool(
                get_news_batch_messages(batch, today),
                "return_news",
                provider or NEWS_LLM_PROVIDER,
                client,
                system_prompt=None,
            )
        except LLMError as e:
            logger.error(f"API error for batch {batch + 1}: {str(e)}")
            continue

        items = coerce_news_items(result["arguments"], result["raw"], today)
        fresh = [item for item in items if item["title"] not in seen_titles]
        seen_titles.update(item["title"] for item in fresh)
        all_news.extend(fresh)
        logger.info(f"Batch {batch + 1}: Got {len(fresh)} news items")

        if batch < batches - 1:
            time.sleep(delay)
    return all_news


def news_to_row(item: Dict, news_date: str) -> Dict:
    return {
        "news_date": news_date,
        "title": item["title"],
        "company": item["company"],
        "industry": item["industry"],
        "category": item["category"],
        "amount": item["amount"],
        "investors": item["investors"],
        "publish_date": item["publishDate"],
        "content": item["content"],
        # AI-provided image URLs are not trusted
        "thumbnail": None,
    }


def row_to_news(row: Dict) -> Dict:
    return {
        "id": str(row.get("id", "")),
        "title": row.get("title", ""),
        "company": row.get("company", ""),
        "industry": row.get("industry", ""),
        "category": row.get("category", ""),
        "amount": row.get("amount", ""),
        "investors": row.get("investors", ""),
        "publishDate": row.get("publish_date") or row.get("news_date", ""),
        "content": row.get("content", ""),
        "thumbnail": row.get("thumbnail"),
    }


def refresh_daily_news(supabase=None, today: Optional[date] = None, force: bool = False, **llm_options) -> Dict:
    """
    Fill the daily_news table for today unless it is already filled.

    Args:
        supabase: Supabase client (created from env when omitted)
        today: date to store the batch under
        force: replace today's rows even if they exist
        llm_options: passed through to fetch_news_from_ai

    Raises:
        NewsFetchError: when the LLM produced no usable news
    """
    supabase = supabase or get_supabase_client()
    today = today or date.today()
    news_date = today.isoformat()

    if not force:
        existing = supabase.table(NEWS_TABLE).select("id").eq("news_date", news_date).limit(1).execute()
        if existing.data:
            logger.info("News already fetched for today")
            return {"success": True, "message": "News already exists for today", "date": news_date}

    news = fetch_news_from_ai(today=today, **llm_options)
    logger.info(f"Total news fetched: {len(news)}")
    if not news:
        raise NewsFetchError("No news fetched from AI")

    # Today's rows are only replaced once a new batch is in hand
    if force:
        supabase.table(NEWS_TABLE).delete().eq("news_date", news_date).execute()

    old_date = (today - timedelta(days=NEWS_RETENTION_DAYS)).isoformat()
    try:
        supabase.table(NEWS_TABLE).delete().lt("news_date", old_date).execute()
    except Exception as e:
        logger.error(f"Error deleting old news: {str(e)}")

    rows = [news_to_row(item, news_date) for item in news]
    supabase.table(NEWS_TABLE).insert(rows).execute()
    logger.info(f"Successfully inserted {len(rows)} news items for {news_date}")
    return {"success": True, "count": len(rows), "date": news_date}


def load_news(supabase=None, limit: int = 20, today: Optional[date] = None) -> List[Dict]:
    """Latest cached news, or the static fallback list when the cache is unavailable."""
    try:
        supabase = supabase or get_supabase_client()
        response = (
            supabase.table(NEWS_TABLE)
            .select("*")
            .order("news_date", desc=True)
            .order("publish_date", desc=True)
            .limit(limit)
            .execute()
        )
        rows = response.data or []
    except Exception as e:
        logger.warning(f"Could not read cached news, using fallback list: {str(e)}")
        rows = []

    if not rows:
        return get_fallback_news(today)
    return [row_to_news(row) for row in rows]


def relative_date(date_string: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    try:
        published = date.fromisoformat(date_string[:10])
    except (TypeError, ValueError):
        return date_string
    days = (today - published).days
    if days < 0 or days >= 7:
        return date_string
    if days == 0:
        return "今天"
    if days == 1:
        return "昨天"
    return f"{days}天前"
