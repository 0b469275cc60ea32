from __future__ import annotations

import datetime
import random

import pytest

from newsletter_curator.models import CuratedStory, RawExtractedStory, StoryCategory
from newsletter_curator.processing.dedupe import (
    DedupeEngine,
    headline_similarity,
    normalize_headline,
    significant_words,
)

PUBLISHED = datetime.datetime(2024, 6, 1, tzinfo=datetime.timezone.utc)


def _raw(headline: str, score: int = 7, **kwargs: object) -> RawExtractedStory:
    return RawExtractedStory(
        headline=headline,
        summary=f"{headline} summary",
        category=kwargs.pop("category", StoryCategory.MODEL_RELEASE),
        base_score=score,
        **kwargs,
    )


def test_normalize_and_significant_words() -> None:
    assert normalize_headline("OpenAI's GPT-5:  Here!") == "openais gpt5 here"
    assert significant_words("The new GPT model is here") == {"model", "here"}


def test_similarity_is_zero_without_significant_words() -> None:
    assert headline_similarity("AI is big", "AI is big") == 0.0


def test_same_headline_from_same_source_is_idempotent() -> None:
    engine = DedupeEngine()
    working: dict[str, CuratedStory] = {}

    first = engine.merge_or_insert(_raw("OpenAI releases GPT-5 model"), "A", working, PUBLISHED)
    second = engine.merge_or_insert(_raw("OpenAI releases GPT-5 model"), "A", working, PUBLISHED)

    assert len(working) == 1
    assert first is second
    assert first.sources == ["A"]
    assert first.cross_source_count == 1


def test_same_headline_from_new_source_increments_once() -> None:
    engine = DedupeEngine()
    working: dict[str, CuratedStory] = {}

    engine.merge_or_insert(_raw("OpenAI releases GPT-5 model"), "A", working, PUBLISHED)
    story = engine.merge_or_insert(_raw("OpenAI releases GPT-5 model"), "B", working, PUBLISHED)

    assert len(working) == 1
    assert story.sources == ["A", "B"]
    assert story.cross_source_count == 2
    assert story.final_score == 0


def test_differently_worded_duplicates_stay_separate() -> None:
    a = "OpenAI releases GPT-5"
    b = "GPT-5 launched by OpenAI today"
    # {openai, releases, gpt5} vs {gpt5, launched, openai, today}
    assert headline_similarity(a, b) == pytest.approx(2 / 5)

    engine = DedupeEngine()
    working: dict[str, CuratedStory] = {}
    engine.merge_or_insert(_raw(a, 9), "Feed A", working, PUBLISHED)
    engine.merge_or_insert(_raw(b, 8), "Feed B", working, PUBLISHED)

    assert len(working) == 2
    assert all(s.cross_source_count == 1 for s in working.values())


def test_higher_score_replaces_text_but_keeps_identity() -> None:
    engine = DedupeEngine()
    working: dict[str, CuratedStory] = {}
    first = engine.merge_or_insert(
        _raw("Anthropic launches Claude desktop application", 6, entities=["Anthropic"], original_url="https://a"),
        "A",
        working,
        PUBLISHED,
    )
    original_id = first.id

    merged = engine.merge_or_insert(
        _raw("Anthropic launches Claude desktop application worldwide", 8, entities=["Claude"], original_url="https://b"),
        "B",
        working,
        PUBLISHED,
    )

    assert merged is first
    assert merged.id == original_id
    assert merged.base_score == 8
    assert merged.headline == "Anthropic launches Claude desktop application worldwide"
    assert merged.summary == "Anthropic launches Claude desktop application worldwide summary"
    assert merged.entities == ["Anthropic"]
    assert merged.original_url == "https://a"


def test_lower_score_keeps_existing_text() -> None:
    engine = DedupeEngine()
    working: dict[str, CuratedStory] = {}
    engine.merge_or_insert(_raw("Google unveils Gemini ultra model", 8), "A", working, PUBLISHED)
    story = engine.merge_or_insert(_raw("Google unveils Gemini ultra model today", 5), "B", working, PUBLISHED)

    assert story.headline == "Google unveils Gemini ultra model"
    assert story.base_score == 8


def test_threshold_is_strict() -> None:
    # {apple, buys, startup} 중 2개 공유, 합집합 4개 -> 정확히 0.5이면 병합하지 않음
    assert headline_similarity("Apple buys startup", "Apple buys company") == pytest.approx(0.5)
    engine = DedupeEngine()
    working: dict[str, CuratedStory] = {}
    engine.merge_or_insert(_raw("Apple buys startup"), "A", working, PUBLISHED)
    engine.merge_or_insert(_raw("Apple buys company"), "B", working, PUBLISHED)
    assert len(working) == 2


def test_ties_go_to_first_inserted_story() -> None:
    engine = DedupeEngine(threshold=0.4)
    working: dict[str, CuratedStory] = {}
    first = engine.merge_or_insert(_raw("alpha beta gamma delta"), "A", working, PUBLISHED)
    engine.merge_or_insert(_raw("alpha beta epsilon zeta"), "B", working, PUBLISHED)

    target = engine.merge_or_insert(_raw("alpha beta"), "C", working, PUBLISHED)

    assert target is first
    assert first.sources == ["A", "C"]


def test_new_stories_get_distinct_ids() -> None:
    engine = DedupeEngine()
    working: dict[str, CuratedStory] = {}
    a = engine.merge_or_insert(_raw("Nvidia posts record quarter"), "A", working, PUBLISHED)
    b = engine.merge_or_insert(_raw("Microsoft ships Copilot update"), "A", working, PUBLISHED)
    assert a.id != b.id
    assert list(working) == [a.id, b.id]


_VOCAB = ["openai", "google", "anthropic", "releases", "model", "launch", "funding", "today", "chip", "policy"]


@pytest.mark.parametrize("seed", range(25))
def test_similarity_is_symmetric(seed: int) -> None:
    rng = random.Random(seed)
    a = " ".join(rng.sample(_VOCAB, rng.randint(0, 6)))
    b = " ".join(rng.sample(_VOCAB, rng.randint(0, 6)))
    assert headline_similarity(a, b) == headline_similarity(b, a)
    assert 0.0 <= headline_similarity(a, b) <= 1.0
