from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple

from newsletter_curator.core.constants import BROWSER_USER_AGENTS


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except Exception:
        return default


@dataclass(frozen=True)
class ContentResolverConfig:
    timeout_sec: int = _env_int("ARTICLE_FETCH_TIMEOUT_SEC", 10)
    max_chars: int = _env_int("ARTICLE_FETCH_MAX_CHARS", 12000)
    min_inline_chars: int = _env_int("ARTICLE_FETCH_MIN_INLINE_CHARS", 500)
    accept_language: str = os.getenv("ARTICLE_FETCH_ACCEPT_LANGUAGE", "en-US,en;q=0.9")
    strip_tags: Tuple[str, ...] = ("script", "style", "noscript")
    user_agents: Tuple[str, ...] = field(default_factory=lambda: BROWSER_USER_AGENTS)
