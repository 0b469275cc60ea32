from __future__ import annotations

STORY_CATEGORIES = (  # LLM 추출 단계에서 허용하는 카테고리 (그 외는 other로 강제)
    "model_release",
    "tool_launch",
    "acquisition",
    "research",
    "funding",
    "regulation",
    "tutorial",
    "industry",
    "company_news",
    "other",
)

CATEGORY_BOOST = {  # 카테고리 가산점 (major_update는 열거형 밖이라 실제로는 매칭되지 않음)
    "model_release": 1,
    "acquisition": 1,
    "major_update": 1,
}

CROSS_SOURCE_BOOST_TWO = 1  # 2개 소스에서 보도
CROSS_SOURCE_BOOST_THREE_PLUS = 2  # 3개 이상 소스에서 보도

RECENCY_BOOST = 1
RECENCY_BOOST_HOURS = 12

MAX_FINAL_SCORE = 10
DEFAULT_BASE_SCORE = 5
MIN_BASE_SCORE = 1
MAX_BASE_SCORE = 10

MAX_STORIES_PER_SOURCE = 6

FEED_USER_AGENT = "Innov8AI-Newsletter/1.0"

BROWSER_USER_AGENTS = (
    # Chrome 121 (Windows)
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/121.0.0.0 Safari/537.36",
    # Chrome 120 (macOS)
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36",
    # Safari 17 (macOS)
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6_4) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
)
