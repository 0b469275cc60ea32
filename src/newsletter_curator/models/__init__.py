"""Typed models for feed items, curated stories and run statistics."""

from .story import (
    CuratedStory,
    CurationProgress,
    CurationResult,
    CurationStats,
    FeedSource,
    NewsItem,
    RawExtractedStory,
    SourceBreakdown,
    StoryCategory,
)

__all__ = [
    "CuratedStory",
    "CurationProgress",
    "CurationResult",
    "CurationStats",
    "FeedSource",
    "NewsItem",
    "RawExtractedStory",
    "SourceBreakdown",
    "StoryCategory",
]
