from celery import Celery, states
from celery.schedules import crontab
import logging
from datetime import datetime

from config import CELERY_BROKER_URL
from news_service import NewsFetchError, refresh_daily_news

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Celery
app = Celery('tasks', broker=CELERY_BROKER_URL)

# Celery configuration
app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='Asia/Shanghai',
    enable_utc=True,
    task_track_started=True,
    task_time_limit=600,
    task_soft_time_limit=540,
    worker_prefetch_multiplier=1,
    beat_schedule={
        'refresh-daily-news': {
            'task': 'tasks.refresh_daily_news_task',
            'schedule': crontab(hour=7, minute=0),
        },
    },
)


@app.task(bind=True, max_retries=3)
def refresh_daily_news_task(self, force=False):
    """Fetch today's financing news into the daily_news table"""
    start_time = datetime.utcnow().isoformat()
    try:
        self.update_state(
            state=states.STARTED,
            meta={'status': 'Fetching', 'start_time': start_time}
        )
        logger.info("Starting daily news fetch")

        result = refresh_daily_news(force=force)

        logger.info(f"Daily news fetch finished: {result}")
        return result

    except NewsFetchError as e:
        logger.error(f"Error fetching daily news: {str(e)}")

        # Retry with exponential backoff
        retry_count = self.request.retries
        if retry_count < self.max_retries:
            wait_time = 60 * (2 ** retry_count)
            logger.info(f"Retrying daily news in {wait_time} seconds (attempt {retry_count + 1}/{self.max_retries})")
            raise self.retry(exc=e, countdown=wait_time)
        logger.error(f"Daily news failed after {self.max_retries} retries")
        raise


if __name__ == '__main__':
    app.start()
