from __future__ import annotations

import datetime

from newsletter_curator.core.constants import FEED_USER_AGENT
from newsletter_curator.models import NewsItem
from newsletter_curator.scrapers.content_resolver import (
    ContentResolver,
    html_to_text,
    is_textual_content_type,
)
from newsletter_curator.scrapers.content_resolver_config import ContentResolverConfig

HTML = (
    "<html><head><style>.x { color: red; }</style><script>var a = 1;</script></head>"
    "<body><h1>Title</h1><p>Hello &amp; welcome to the article.</p><noscript>enable js</noscript></body></html>"
)


class _Resp:
    def __init__(self, text: str = HTML, status_code: int = 200, content_type: str = "text/html; charset=utf-8") -> None:
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status_code
        self.headers = {"Content-Type": content_type}
        self.encoding = "utf-8"
        self.url = "https://example.com/final"


def _item(content: str = "", summary: str = "short summary", url: str = "https://example.com/a") -> NewsItem:
    return NewsItem(
        id="1",
        title="A",
        url=url,
        source_url="https://feeds.example.com",
        source_name="S",
        published_at=datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc),
        summary=summary,
        content=content,
    )


def _unexpected_get(*args: object, **kwargs: object) -> _Resp:
    raise AssertionError("network must not be used")


def test_html_to_text_drops_script_style_noscript() -> None:
    assert html_to_text(HTML) == "Title Hello & welcome to the article."


def test_is_textual_content_type() -> None:
    assert is_textual_content_type("text/html; charset=utf-8")
    assert is_textual_content_type("")
    assert not is_textual_content_type("image/png")
    assert not is_textual_content_type("application/javascript")


def test_long_inline_content_skips_network() -> None:
    resolver = ContentResolver(http_get=_unexpected_get)
    content = "c" * 600
    assert resolver.resolve(_item(content=content)) == content


def test_long_summary_used_when_content_short() -> None:
    resolver = ContentResolver(http_get=_unexpected_get)
    summary = "s" * 550
    assert resolver.resolve(_item(content="tiny", summary=summary)) == summary


def test_short_inline_fetches_article_with_browser_user_agent() -> None:
    calls: list[dict] = []

    def fake_get(url: str, **kwargs: object) -> _Resp:
        calls.append({"url": url, **kwargs})
        return _Resp()

    resolver = ContentResolver(http_get=fake_get, choose_user_agent=lambda pool: pool[0])

    text = resolver.resolve(_item())

    assert text == "Title Hello & welcome to the article."
    assert calls[0]["url"] == "https://example.com/a"
    assert calls[0]["headers"]["User-Agent"].startswith("Mozilla/5.0")


def test_fetched_text_is_truncated() -> None:
    resolver = ContentResolver(ContentResolverConfig(max_chars=5), http_get=lambda url, **kw: _Resp())
    assert resolver.resolve(_item()) == "Title"


def test_failures_fall_back_to_inline_text() -> None:
    def raising_get(url: str, **kwargs: object) -> _Resp:
        raise TimeoutError("slow")

    item = _item(content="", summary="short summary")
    assert ContentResolver(http_get=raising_get).resolve(item) == "short summary"
    assert ContentResolver(http_get=lambda url, **kw: _Resp(status_code=403)).resolve(item) == "short summary"
    assert (
        ContentResolver(http_get=lambda url, **kw: _Resp(content_type="application/pdf")).resolve(item)
        == "short summary"
    )


def test_fetch_page_text_reports_notes() -> None:
    result = ContentResolver(http_get=lambda url, **kw: _Resp(status_code=404)).fetch_page_text("https://x")
    assert result.text == ""
    assert result.meta.status == 404
    assert result.meta.notes == ["http_error:404"]


def test_missing_url_returns_inline_text_without_fetch() -> None:
    resolver = ContentResolver(http_get=_unexpected_get)
    assert resolver.resolve(_item(url="", content="some body", summary="s")) == "some body"


def test_empty_user_agent_pool_uses_feed_agent() -> None:
    calls: list[dict] = []

    def fake_get(url: str, **kwargs: object) -> _Resp:
        calls.append(kwargs)
        return _Resp()

    resolver = ContentResolver(ContentResolverConfig(user_agents=()), http_get=fake_get)

    assert resolver.resolve(_item()) == "Title Hello & welcome to the article."
    assert calls[0]["headers"]["User-Agent"] == FEED_USER_AGENT
