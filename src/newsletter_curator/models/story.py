from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from newsletter_curator.core.constants import STORY_CATEGORIES
from newsletter_curator.utils import isoformat_utc, parse_datetime_utc, utc_now


class StoryCategory(str, Enum):
    MODEL_RELEASE = "model_release"
    TOOL_LAUNCH = "tool_launch"
    ACQUISITION = "acquisition"
    RESEARCH = "research"
    FUNDING = "funding"
    REGULATION = "regulation"
    TUTORIAL = "tutorial"
    INDUSTRY = "industry"
    COMPANY_NEWS = "company_news"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: Any) -> "StoryCategory":
        # LLM이 돌려준 카테고리 문자열을 열거형으로 강제 (모르는 값은 OTHER)
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower().replace("-", "_").replace(" ", "_")
        if raw in STORY_CATEGORIES:
            return cls(raw)
        return cls.OTHER


@dataclass(frozen=True)
class FeedSource:
    name: str
    url: str
    category: str = "news"
    tier: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeedSource":
        tier = data.get("tier")
        try:
            tier = int(tier) if tier is not None else None
        except (TypeError, ValueError):
            tier = None
        return cls(
            name=str(data.get("name") or data.get("url") or "").strip(),
            url=str(data.get("url") or "").strip(),
            category=str(data.get("category") or "news"),
            tier=tier,
        )


@dataclass(frozen=True)
class NewsItem:
    id: str
    title: str
    url: str
    source_url: str
    source_name: str
    published_at: datetime.datetime
    summary: str = ""
    content: str = ""
    image_url: str = ""
    author: str = ""


@dataclass
class RawExtractedStory:
    headline: str
    summary: str
    category: StoryCategory = StoryCategory.OTHER
    base_score: int = 5
    entities: list[str] = field(default_factory=list)
    original_url: str | None = None


@dataclass
class CuratedStory:
    id: str
    headline: str
    summary: str
    category: StoryCategory
    base_score: int
    published_at: datetime.datetime
    sources: list[str] = field(default_factory=list)
    cross_source_count: int = 0
    entities: list[str] = field(default_factory=list)
    original_url: str | None = None
    # 점수 계산(StoryScorer.score_all) 전에는 0
    final_score: int = 0
    boosts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "headline": self.headline,
            "summary": self.summary,
            "category": self.category.value,
            "baseScore": self.base_score,
            "finalScore": self.final_score,
            "entities": list(self.entities),
            "originalUrl": self.original_url,
            "sources": list(self.sources),
            "crossSourceCount": self.cross_source_count,
            "publishedAt": isoformat_utc(self.published_at),
            "boosts": list(self.boosts),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CuratedStory":
        sources = [str(s) for s in (data.get("sources") or [])]
        return cls(
            id=str(data.get("id") or ""),
            headline=str(data.get("headline") or ""),
            summary=str(data.get("summary") or ""),
            category=StoryCategory.coerce(data.get("category")),
            base_score=int(data.get("baseScore") or 0),
            published_at=parse_datetime_utc(data.get("publishedAt")) or utc_now(),
            sources=sources,
            cross_source_count=int(data.get("crossSourceCount") or len(sources)),
            entities=[str(e) for e in (data.get("entities") or [])],
            original_url=data.get("originalUrl"),
            final_score=int(data.get("finalScore") or 0),
            boosts=[str(b) for b in (data.get("boosts") or [])],
        )


@dataclass(frozen=True)
class SourceBreakdown:
    source_name: str
    found: int
    kept: int

    def to_dict(self) -> dict[str, Any]:
        return {"sourceName": self.source_name, "found": self.found, "kept": self.kept}


@dataclass(frozen=True)
class CurationStats:
    sources_analyzed: int
    total_articles_found: int
    articles_processed: int
    breakdown: list[SourceBreakdown] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourcesAnalyzed": self.sources_analyzed,
            "totalArticlesFound": self.total_articles_found,
            "articlesProcessed": self.articles_processed,
            "breakdown": [b.to_dict() for b in self.breakdown],
        }


@dataclass(frozen=True)
class CurationProgress:
    stage: str  # "fetching" | "extracting" | "scoring" | "done"
    current: int
    total: int
    message: str


@dataclass(frozen=True)
class CurationResult:
    stories: list[CuratedStory]
    stats: CurationStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "count": len(self.stories),
            "stories": [s.to_dict() for s in self.stories],
            "stats": self.stats.to_dict(),
        }
