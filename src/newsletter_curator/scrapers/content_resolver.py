from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

import requests
from bs4 import BeautifulSoup

from newsletter_curator.core.constants import FEED_USER_AGENT
from newsletter_curator.models import NewsItem
from newsletter_curator.scrapers.content_resolver_config import ContentResolverConfig
from newsletter_curator.utils import clean_text, truncate

logger = logging.getLogger(__name__)

HttpGet = Callable[..., Any]


# -----------------------------
# Public return types
# -----------------------------
@dataclass(frozen=True)
class FetchMeta:
    requested_url: str
    final_url: str
    status: int
    html_len: int
    notes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FetchResult:
    text: str
    meta: FetchMeta


# -----------------------------
# Utilities
# -----------------------------
def is_textual_content_type(content_type: str) -> bool:
    ct = (content_type or "").lower()
    if not ct:
        return True
    if any(x in ct for x in ["text/javascript", "application/javascript", "text/css"]):
        return False
    return any(x in ct for x in ["text/", "application/xml", "application/xhtml+xml"])


def html_to_text(html: str, strip_tags: Iterable[str] = ("script", "style", "noscript")) -> str:
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(list(strip_tags)):
        tag.decompose()
    return clean_text(soup.get_text(" "))


def _safe_decode_response(resp: Any) -> str:
    # 인코딩 헤더가 없으면 apparent_encoding으로 보정
    try:
        if not getattr(resp, "encoding", None):
            resp.encoding = resp.apparent_encoding
    except Exception as e:
        logger.debug("encoding_guess_failed: %s", e)
    return resp.text or ""


def _best_inline_text(item: NewsItem) -> str:
    content = item.content or ""
    summary = item.summary or ""
    return content if len(content) >= len(summary) else summary


# -----------------------------
# Resolver
# -----------------------------
class ContentResolver:
    """Resolve the readable text of a feed item.

    Long inline text from the feed is used as-is; otherwise the article page is
    downloaded and reduced to plain text. Failures never propagate: the caller
    always receives the best text available, possibly empty.
    """

    def __init__(
        self,
        config: Optional[ContentResolverConfig] = None,
        *,
        http_get: Optional[HttpGet] = None,
        choose_user_agent: Optional[Callable[[tuple[str, ...]], str]] = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config or ContentResolverConfig()
        self._http_get = http_get or requests.get
        self._choose_user_agent = choose_user_agent or random.choice
        self._log = log or logger

    def resolve(self, item: NewsItem) -> str:
        cfg = self._config
        if len(item.content or "") >= cfg.min_inline_chars:
            return truncate(item.content, cfg.max_chars)
        if len(item.summary or "") >= cfg.min_inline_chars:
            return truncate(item.summary, cfg.max_chars)

        fallback = _best_inline_text(item)
        if not item.url:
            return fallback

        result = self.fetch_page_text(item.url)
        if result.meta.notes:
            self._log.info(
                "article_fetch_degraded: %s notes=%s",
                item.url,
                ",".join(result.meta.notes),
            )
        return result.text or fallback

    def fetch_page_text(self, url: str) -> FetchResult:
        cfg = self._config
        headers = {
            "User-Agent": self._choose_user_agent(cfg.user_agents) if cfg.user_agents else FEED_USER_AGENT,
            "Accept-Language": cfg.accept_language,
        }
        try:
            resp = self._http_get(url, headers=headers, timeout=cfg.timeout_sec, allow_redirects=True)
        except Exception as e:
            return FetchResult(
                text="",
                meta=FetchMeta(url, url, 0, 0, [f"request_error:{type(e).__name__}:{e}"]),
            )

        final_url = getattr(resp, "url", None) or url
        status = getattr(resp, "status_code", 0)
        raw_len = len(getattr(resp, "content", b"") or b"")
        if not 200 <= status < 300:
            return FetchResult(
                text="",
                meta=FetchMeta(url, final_url, status, raw_len, [f"http_error:{status}"]),
            )

        content_type = (getattr(resp, "headers", {}) or {}).get("Content-Type") or ""
        if not is_textual_content_type(content_type):
            return FetchResult(
                text="",
                meta=FetchMeta(url, final_url, status, raw_len, [f"non_textual_content_type:{content_type}"]),
            )

        try:
            text = html_to_text(_safe_decode_response(resp), cfg.strip_tags)
        except Exception as e:
            return FetchResult(
                text="",
                meta=FetchMeta(url, final_url, status, raw_len, [f"parse_error:{type(e).__name__}"]),
            )

        notes = [] if text else ["empty_text"]
        return FetchResult(
            text=truncate(text, cfg.max_chars),
            meta=FetchMeta(url, final_url, status, raw_len, notes),
        )
