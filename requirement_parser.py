"""Keyword/regex requirement parsing, used when the LLM cannot parse the text."""
import re
from typing import Dict, List

from normalizer import dedupe

REGION_GROUPS = {
    "长三角": ["上海", "苏州", "杭州", "南京", "无锡", "合肥"],
    "珠三角": ["深圳", "广州", "东莞", "佛山"],
    "京津冀": ["北京", "天津", "雄安"],
    "成渝": ["成都", "重庆"],
    "华东": ["上海", "苏州", "杭州", "南京", "无锡", "合肥"],
    "华南": ["深圳", "广州", "东莞", "佛山"],
    "华北": ["北京", "天津"],
    "西南": ["成都", "重庆", "昆明"],
}

CITIES = ["上海", "北京", "深圳", "广州", "杭州", "苏州", "南京", "成都", "无锡", "合肥", "武汉", "西安"]

INDUSTRIES = [
    "AI", "人工智能", "医疗", "医疗健康", "生物医药", "机器人", "智能制造", "芯片", "半导体",
    "新能源", "新材料", "自动驾驶", "物流", "SaaS", "云计算", "大数据", "量子", "脑机接口", "基因",
]

STAGES = ["天使轮", "Pre-A轮", "A轮", "A+轮", "B轮", "B+轮", "C轮", "C+轮", "D轮", "IPO"]

EXTRA_KEYWORDS = ["头部基金", "头部投资", "扩张", "增长", "商业化", "量产", "出口", "头部客户"]

SCENARIOS = ["创新园区", "产业园", "总部办公", "实验室", "研发中心", "制造工厂", "孵化器", "加速器"]

MANUFACTURING = {"机器人", "智能制造", "新能源", "新材料"}
DIGITAL = {"AI", "人工智能", "SaaS", "云计算", "大数据"}
LIFE_SCIENCE = {"医疗", "生物医药", "基因"}

CHINESE_NUMERALS = {"一": 1, "两": 2, "二": 2, "三": 3, "四": 4, "五": 5, "六": 6, "七": 7, "八": 8, "九": 9, "十": 10}

RECENT_YEARS_RE = re.compile(r"(?:过去|最近|近)(\d+|[一两二三四五六七八九十])年")
SINCE_YEAR_RE = re.compile(r"(\d{4})年(?:以后|之后|至今)")


def years_in(token: str) -> int:
    return int(token) if token.isdigit() else CHINESE_NUMERALS[token]


def parse_time_window(text: str) -> str:
    match = RECENT_YEARS_RE.search(text)
    if match:
        return f"近{years_in(match.group(1))}年内"
    match = SINCE_YEAR_RE.search(text)
    if match:
        return f"{match.group(1)}年以后"
    return ""


def infer_scenario(text: str, industries: List[str]) -> str:
    for scenario in SCENARIOS:
        if scenario in text:
            return scenario
    chosen = set(industries)
    if chosen & MANUFACTURING:
        return "产业园 / 制造工厂"
    if chosen & DIGITAL:
        return "创新园区 / 总部办公"
    if chosen & LIFE_SCIENCE:
        return "研发中心 / 实验室"
    return "创新园区"


def parse_requirement_locally(text: str) -> Dict:
    regions = []
    for group, cities in REGION_GROUPS.items():
        if group in text:
            regions.extend(cities)
    regions.extend(city for city in CITIES if city in text)

    lowered = text.lower()
    industries = [industry for industry in INDUSTRIES if industry.lower() in lowered]

    stages = [stage for stage in STAGES if stage in text]
    if "A/B轮" in text or "AB轮" in text:
        stages.extend(["A轮", "A+轮", "B轮"])

    extras = [keyword for keyword in EXTRA_KEYWORDS if keyword in text]

    return {
        "region_preference": dedupe(regions),
        "industry_preference": dedupe(industries),
        "stage_preference": dedupe(stages),
        "time_window": parse_time_window(text),
        "extra_preferences": dedupe(extras),
        "scenario": infer_scenario(text, industries),
    }
