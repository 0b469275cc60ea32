from __future__ import annotations

import datetime
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Iterable, Optional, Sequence

import feedparser
import requests

from newsletter_curator.core.constants import FEED_USER_AGENT
from newsletter_curator.models import FeedSource, NewsItem
from newsletter_curator.utils import (
    clean_text,
    normalize_title_key,
    stable_id,
    struct_time_to_utc,
    truncate,
    utc_now,
)

logger = logging.getLogger(__name__)

HttpGet = Callable[..., Any]
ParseFunc = Callable[[Any], Any]


# -----------------------------
# Entry field helpers
# -----------------------------
def _entry_get(entry: Any, key: str, default: Any = None) -> Any:
    if isinstance(entry, dict):
        return entry.get(key, default)
    return getattr(entry, key, default)


def _entry_link(entry: Any) -> str:
    link = _entry_get(entry, "link") or ""
    if isinstance(link, str) and link.strip():
        return link.strip()
    # Atom: <link rel="alternate" href="..."/> only
    for candidate in _entry_get(entry, "links") or []:
        href = candidate.get("href") if isinstance(candidate, dict) else getattr(candidate, "href", "")
        if href:
            return str(href).strip()
    return ""


def _entry_published(entry: Any, fallback: datetime.datetime) -> datetime.datetime:
    for key in ("published_parsed", "updated_parsed", "created_parsed"):
        dt = struct_time_to_utc(_entry_get(entry, key))
        if dt is not None:
            return dt
    return fallback


def _entry_content(entry: Any) -> str:
    parts: list[str] = []
    for content in _entry_get(entry, "content") or []:
        value = content.get("value", "") if isinstance(content, dict) else getattr(content, "value", "")
        if value:
            parts.append(value)
    return clean_text(" ".join(parts)) if parts else ""


def _entry_image(entry: Any) -> str:
    for key in ("media_content", "media_thumbnail"):
        media = _entry_get(entry, key) or []
        if media and isinstance(media[0], dict) and media[0].get("url"):
            return str(media[0]["url"])
    for link in _entry_get(entry, "links") or []:
        if not isinstance(link, dict):
            continue
        if link.get("rel") == "enclosure" and str(link.get("type", "")).startswith("image"):
            return str(link.get("href") or "")
    return ""


def _entry_author(entry: Any) -> str:
    author = _entry_get(entry, "author") or ""
    if not author:
        detail = _entry_get(entry, "author_detail") or {}
        author = detail.get("name", "") if isinstance(detail, dict) else ""
    return clean_text(str(author))


# -----------------------------
# Feed reader
# -----------------------------
class FeedReader:
    def __init__(
        self,
        *,
        max_entries_per_feed: int = 10,
        timeout_sec: int = 10,
        max_workers: int = 8,
        summary_max_chars: int = 300,
        user_agent: str = FEED_USER_AGENT,
        http_get: Optional[HttpGet] = None,
        feed_parser: ParseFunc = feedparser.parse,
        now_provider: Callable[[], datetime.datetime] | None = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._max_entries_per_feed = max_entries_per_feed
        self._timeout_sec = timeout_sec
        self._max_workers = max(1, max_workers)
        self._summary_max_chars = summary_max_chars
        self._user_agent = user_agent
        self._http_get = http_get or requests.get
        self._feed_parser = feed_parser
        self._now_provider = now_provider or utc_now
        self._log = log or logger

    def fetch_feed(self, feed: FeedSource) -> list[NewsItem]:
        """Fetch and parse a single feed. Any failure yields an empty list."""
        try:
            resp = self._http_get(
                feed.url,
                headers={"User-Agent": self._user_agent},
                timeout=self._timeout_sec,
            )
        except Exception as e:
            self._log.warning("feed_fetch_failed: %s (%s: %s)", feed.name, type(e).__name__, e)
            return []

        status = getattr(resp, "status_code", 0)
        if not 200 <= status < 300:
            self._log.warning("feed_http_error: %s status=%s", feed.name, status)
            return []

        try:
            parsed = self._feed_parser(resp.content)
        except Exception as e:
            self._log.warning("feed_parse_failed: %s (%s)", feed.name, e)
            return []

        entries = list(_entry_get(parsed, "entries") or [])
        if not entries:
            if _entry_get(parsed, "bozo"):
                self._log.warning(
                    "feed_malformed: %s (%s)", feed.name, _entry_get(parsed, "bozo_exception")
                )
            return []

        items = [self._to_news_item(entry, feed) for entry in entries]
        items.sort(key=lambda x: x.published_at, reverse=True)
        items = items[: self._max_entries_per_feed]
        self._log.info("feed_done: %s items=%s", feed.name, len(items))
        return items

    def fetch_all(self, feeds: Sequence[FeedSource]) -> list[NewsItem]:
        """Fetch every feed concurrently; newest first, deduplicated by title."""
        if not feeds:
            return []

        all_items: list[NewsItem] = []
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(feeds))) as executor:
            future_map = {executor.submit(self.fetch_feed, feed): feed for feed in feeds}
            for future in as_completed(future_map):
                feed = future_map[future]
                try:
                    all_items.extend(future.result())
                except Exception as exc:
                    self._log.exception("feed_worker_error: %s (%s)", feed.name, exc)

        all_items.sort(key=lambda x: x.published_at, reverse=True)
        return dedupe_by_title(all_items)

    def _to_news_item(self, entry: Any, feed: FeedSource) -> NewsItem:
        title = clean_text(str(_entry_get(entry, "title") or "")) or "Untitled"
        url = _entry_link(entry)
        summary_raw = _entry_get(entry, "summary") or _entry_get(entry, "description") or ""
        return NewsItem(
            id=stable_id(title, url),
            title=title,
            url=url,
            source_url=feed.url,
            source_name=feed.name,
            published_at=_entry_published(entry, self._now_provider()),
            summary=truncate(clean_text(str(summary_raw)), self._summary_max_chars),
            content=_entry_content(entry),
            image_url=_entry_image(entry),
            author=_entry_author(entry),
        )


def dedupe_by_title(items: Iterable[NewsItem]) -> list[NewsItem]:
    # 입력 순서대로 첫 항목만 남긴다 (최신순 정렬 후 호출하면 최신 항목이 남음)
    seen: set[str] = set()
    out: list[NewsItem] = []
    for item in items:
        key = normalize_title_key(item.title)
        if key:
            if key in seen:
                continue
            seen.add(key)
        out.append(item)
    return out


def filter_by_date(
    items: Iterable[NewsItem],
    days: int,
    now: datetime.datetime | None = None,
) -> list[NewsItem]:
    current = now or utc_now()
    cutoff = current - datetime.timedelta(days=days)
    return [item for item in items if item.published_at >= cutoff]
