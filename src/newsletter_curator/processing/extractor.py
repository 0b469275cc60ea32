from __future__ import annotations

import math
from typing import Any

from newsletter_curator.core.constants import (
    DEFAULT_BASE_SCORE,
    MAX_BASE_SCORE,
    MAX_STORIES_PER_SOURCE,
    MIN_BASE_SCORE,
)
from newsletter_curator.models import NewsItem, RawExtractedStory, StoryCategory
from newsletter_curator.processing.parsing import parse_json_array
from newsletter_curator.processing.prompts.curation_prompt import build_curation_prompt
from newsletter_curator.processing.types import LLMClient, LogFunc
from newsletter_curator.utils import clean_text, dedupe_keep_order, isoformat_utc, truncate


def _noop_log(_: str) -> None:
    return None


def coerce_base_score(value: Any) -> int:
    # 숫자가 아니면 기본값, 숫자면 반올림 후 1~10으로 클램프
    if isinstance(value, bool):
        return DEFAULT_BASE_SCORE
    try:
        score = float(value)
    except (TypeError, ValueError):
        return DEFAULT_BASE_SCORE
    if math.isnan(score) or math.isinf(score):
        return DEFAULT_BASE_SCORE
    rounded = int(math.floor(score + 0.5))
    return max(MIN_BASE_SCORE, min(MAX_BASE_SCORE, rounded))


def coerce_entities(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    names = [clean_text(str(v)) for v in value if v is not None and not isinstance(v, (dict, list))]
    return dedupe_keep_order([n for n in names if n])


def validate_story(entry: Any) -> RawExtractedStory | None:
    if not isinstance(entry, dict):
        return None
    headline = clean_text(str(entry.get("headline") or ""))
    if not headline:
        return None
    summary = clean_text(str(entry.get("summary") or "")) or headline
    original_url = entry.get("originalUrl") or entry.get("original_url")
    original_url = str(original_url).strip() if original_url else None
    return RawExtractedStory(
        headline=headline,
        summary=summary,
        category=StoryCategory.coerce(entry.get("category")),
        base_score=coerce_base_score(entry.get("baseScore", entry.get("base_score"))),
        entities=coerce_entities(entry.get("entities")),
        original_url=original_url or None,
    )


def fallback_story(item: NewsItem) -> RawExtractedStory:
    return RawExtractedStory(
        headline=item.title,
        summary=item.summary or item.title,
        category=StoryCategory.OTHER,
        base_score=DEFAULT_BASE_SCORE,
        entities=[],
        original_url=item.url or None,
    )


class StoryExtractor:
    def __init__(
        self,
        llm_client: LLMClient,
        *,
        model: str,
        temperature: float = 0.2,
        max_tokens: int = 3000,
        min_content_chars: int = 100,
        max_content_chars: int = 12000,
        max_stories: int = MAX_STORIES_PER_SOURCE,
        logger: LogFunc | None = None,
    ) -> None:
        self._llm = llm_client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._min_content_chars = min_content_chars
        self._max_content_chars = max_content_chars
        self._max_stories = max_stories
        self._log = logger or _noop_log

    def build_prompt(self, item: NewsItem, content: str) -> str:
        return build_curation_prompt(
            source_name=item.source_name,
            title=item.title,
            published_at=isoformat_utc(item.published_at),
            content=truncate(content, self._max_content_chars),
        )

    def extract(self, item: NewsItem, resolved_content: str) -> list[RawExtractedStory]:
        content = resolved_content or ""
        # 본문이 너무 짧으면 LLM 호출 없이 제목/요약으로 대체
        if len(content) < self._min_content_chars:
            return [fallback_story(item)]

        try:
            text = self._llm.complete(
                self.build_prompt(item, content),
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            self._log(f"⚠️ LLM 호출 오류: [{item.source_name}] {type(e).__name__}: {e}")
            return [fallback_story(item)]
        if not text:
            return [fallback_story(item)]

        entries = parse_json_array(text)
        if entries is None:
            self._log(f"⚠️ 추출 응답 파싱 실패: [{item.source_name}] {item.title[:40]}")
            return [fallback_story(item)]

        stories = [s for s in (validate_story(e) for e in entries) if s is not None]
        if not stories:
            return [fallback_story(item)]
        return stories[: self._max_stories]
