import argparse
import logging
import sys

from news_service import NewsFetchError, load_news, refresh_daily_news, relative_date

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def show_news(limit: int):
    for item in load_news(limit=limit):
        print(f"[{item['category']}] {item['title']} ({relative_date(item['publishDate'])})")
        print(f"    {item['content']}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Fetch daily financing news into Supabase')
    parser.add_argument('--force', action='store_true', help="Replace today's news even if already fetched")
    parser.add_argument('--show', action='store_true', help='Print the cached news instead of fetching')
    parser.add_argument('--limit', type=int, default=20, help='Number of items to print with --show')
    args = parser.parse_args(argv)

    if args.show:
        show_news(args.limit)
        return 0

    try:
        result = refresh_daily_news(force=args.force)
    except (NewsFetchError, ValueError) as e:
        logger.error(f"Error in daily news fetch: {str(e)}")
        return 1

    logger.info(f"Daily news result: {result}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
