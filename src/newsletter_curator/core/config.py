from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_repo_root = Path(__file__).resolve().parents[3]
load_dotenv(dotenv_path=_repo_root / ".env")

# ==========================================
# 기본 피드 (사용자 설정)
# tier 1: 뉴스레터(한 항목에 여러 기사), 2: 뉴스 사이트, 3: 공식 블로그, 4: 커뮤니티
# ==========================================

RSS_FEEDS = [
    {"name": "The Rundown AI", "url": "https://rss.app/feeds/Kc554BCmk9PUValj.xml", "category": "newsletter", "tier": 1},
    {"name": "Ben's Bites", "url": "https://rss.app/feeds/O60XfEFYoxJhYVkS.xml", "category": "newsletter", "tier": 1},
    {"name": "The Neuron", "url": "https://rss.app/feeds/e2QjBpEDLPfVUeoI.xml", "category": "newsletter", "tier": 1},
    {"name": "Superhuman AI", "url": "https://rss.app/feeds/3tDyvQwHp8cgL7qs.xml", "category": "newsletter", "tier": 1},
    {"name": "Techspresso", "url": "https://www.dupple.com/techpresso-archives/rss.xml", "category": "newsletter", "tier": 1},
    {"name": "TLDR AI", "url": "https://tldr.tech/ai/rss", "category": "newsletter", "tier": 1},
    {"name": "TechCrunch AI", "url": "https://techcrunch.com/category/artificial-intelligence/feed/", "category": "news", "tier": 2},
    {"name": "The Verge AI", "url": "https://www.theverge.com/rss/ai-artificial-intelligence/index.xml", "category": "news", "tier": 2},
    {"name": "VentureBeat AI", "url": "https://venturebeat.com/category/ai/feed/", "category": "news", "tier": 2},
    {"name": "Ars Technica AI", "url": "https://feeds.arstechnica.com/arstechnica/technology-lab", "category": "news", "tier": 2},
    {"name": "Wired AI", "url": "https://www.wired.com/feed/tag/ai/latest/rss", "category": "news", "tier": 2},
    {"name": "MIT News AI", "url": "https://news.mit.edu/topic/artificial-intelligence2-rss.xml", "category": "news", "tier": 2},
    {"name": "OpenAI Blog", "url": "https://openai.com/blog/rss/", "category": "blog", "tier": 3},
    {"name": "Google AI Blog", "url": "https://blog.google/technology/ai/rss/", "category": "blog", "tier": 3},
    {"name": "Anthropic News", "url": "https://www.anthropic.com/news/rss", "category": "blog", "tier": 3},
    {
        "name": "Hacker News AI",
        "url": "https://hnrss.org/newest?q=AI+OR+GPT+OR+LLM+OR+Claude+OR+OpenAI&points=50",
        "category": "social",
        "tier": 4,
    },
    {"name": "r/ArtificialInteligence", "url": "https://www.reddit.com/r/ArtificialInteligence/top/.rss?t=day", "category": "social", "tier": 4},
    {"name": "r/LocalLLaMA", "url": "https://www.reddit.com/r/LocalLLaMA/top/.rss?t=day", "category": "social", "tier": 4},
    {"name": "r/MachineLearning", "url": "https://www.reddit.com/r/MachineLearning/top/.rss?t=day", "category": "social", "tier": 4},
    {"name": "r/OpenAI", "url": "https://www.reddit.com/r/OpenAI/top/.rss?t=day", "category": "social", "tier": 4},
    {"name": "r/Singularity", "url": "https://www.reddit.com/r/singularity/top/.rss?t=day", "category": "social", "tier": 4},
]

NEWSLETTER_NAME = os.getenv("NEWSLETTER_NAME", "Innov8 AI")


def _parse_csv_env(name: str) -> list[str]:
    """CSV 형태의 환경변수를 리스트로 파싱."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip()]


def _env_int(name: str, default: int) -> int:
    """정수형 환경변수를 안전하게 파싱."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except Exception:
        return default


REPO_ROOT = _repo_root
DATA_DIR = Path(os.getenv("DATA_DIR", str(REPO_ROOT / "data")))
OUTPUT_JSON = os.getenv("OUTPUT_JSON", str(DATA_DIR / "curated_stories.json"))

# ==========================================
# 피드 수집
# ==========================================

MAX_ENTRIES_PER_FEED = _env_int("MAX_ENTRIES_PER_FEED", 10)
FEED_FETCH_TIMEOUT_SEC = _env_int("FEED_FETCH_TIMEOUT_SEC", 10)
FEED_FETCH_MAX_WORKERS = _env_int("FEED_FETCH_MAX_WORKERS", 8)
FEED_SUMMARY_MAX_CHARS = _env_int("FEED_SUMMARY_MAX_CHARS", 300)
CURATION_MAX_AGE_DAYS = _env_int("CURATION_MAX_AGE_DAYS", 7)
DISABLED_FEEDS = set(_parse_csv_env("DISABLED_FEEDS"))

# ==========================================
# 후보 선별 (소스별 쿼터 + 전체 상한)
# ==========================================

PER_SOURCE_QUOTA = _env_int("PER_SOURCE_QUOTA", 2)
CANDIDATE_TOTAL_CAP = _env_int("CANDIDATE_TOTAL_CAP", 20)

# ==========================================
# LLM (OpenRouter)
# ==========================================

OPENROUTER_API_BASE = os.getenv("OPENROUTER_API_BASE", "https://openrouter.ai/api/v1")
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "google/gemini-2.0-flash-001")
OPENROUTER_TIMEOUT_SEC = _env_int("OPENROUTER_TIMEOUT_SEC", 60)
OPENROUTER_REFERER = os.getenv("OPENROUTER_REFERER", "http://localhost:3000")
OPENROUTER_TITLE = os.getenv("OPENROUTER_TITLE", NEWSLETTER_NAME)
EXTRACTION_TEMPERATURE = _env_float("EXTRACTION_TEMPERATURE", 0.2)
EXTRACTION_MAX_TOKENS = _env_int("EXTRACTION_MAX_TOKENS", 3000)
EXTRACTION_MIN_CONTENT_CHARS = _env_int("EXTRACTION_MIN_CONTENT_CHARS", 100)
# 추출 호출은 순차 실행, 호출 사이 지연(초)
EXTRACTION_DELAY_SEC = _env_float("EXTRACTION_DELAY_SEC", 0.3)

# ==========================================
# 본문 확보
# ==========================================

ARTICLE_FETCH_MIN_INLINE_CHARS = _env_int("ARTICLE_FETCH_MIN_INLINE_CHARS", 500)
ARTICLE_FETCH_MAX_CHARS = _env_int("ARTICLE_FETCH_MAX_CHARS", 12000)

# ==========================================
# 중복 병합 / 점수
# ==========================================

TITLE_MERGE_JACCARD = _env_float("TITLE_MERGE_JACCARD", 0.5)
TITLE_MIN_WORD_LEN = _env_int("TITLE_MIN_WORD_LEN", 3)
MIN_SCORE_TO_SHOW = _env_int("MIN_SCORE_TO_SHOW", 6)


def get_api_key() -> str:
    return os.getenv("OPENROUTER_API_KEY", "").strip()


def get_default_feeds() -> list[dict]:
    return [f for f in RSS_FEEDS if f["name"] not in DISABLED_FEEDS]
