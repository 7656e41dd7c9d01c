import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# LLM provider configuration
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "kimi")
NEWS_LLM_PROVIDER = os.getenv("NEWS_LLM_PROVIDER", "tuzi")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", 60))

PROVIDERS = {
    "kimi": {
        "url": "https://api.moonshot.cn/v1/chat/completions",
        "model": os.getenv("KIMI_MODEL", "moonshot-v1-8k"),
        "key_env": "KIMI_API_KEY",
    },
    "tuzi": {
        "url": "https://api.tu-zi.com/v1/chat/completions",
        "model": os.getenv("TUZI_MODEL", "deepseek-chat"),
        "key_env": "TUZI_API_KEY",
    },
    "ollama": {
        "host": os.getenv("OLLAMA_HOST", "http://localhost:11434"),
        "model": os.getenv("OLLAMA_MODEL", "llama3.3:70b"),
    },
}

# Supabase configuration
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
NEWS_TABLE = "daily_news"
NEWS_RETENTION_DAYS = 3
NEWS_BATCHES = 2
NEWS_BATCH_DELAY = 1.0

# Celery configuration
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")

# Matching configuration
TOP_N_RESULTS = 10
DEFAULT_TIME_WINDOW_YEAR = 2023

# System prompt for the LLM
SYSTEM_PROMPT = """你是一名资深的政府招商顾问，熟悉中国创投市场、产业园区运营和地方产业政策。
你的任务是帮助地方政府和园区理解招商需求、筛选和评估候选企业。
输出必须简洁、结构化，严格按照给定的函数参数格式返回，不要输出解释、寒暄或额外文字。
信息不足时请如实说明，不要编造具体数字。
"""
