from __future__ import annotations

import datetime
import itertools
from typing import Callable

from newsletter_curator.models import CuratedStory, RawExtractedStory
from newsletter_curator.utils import jaccard, normalize_text, stable_id


def normalize_headline(text: str) -> str:
    return normalize_text(text)


def significant_words(text: str, min_word_len: int = 3) -> set[str]:
    # 길이가 min_word_len 이하인 단어(관사/전치사 등)는 비교에서 제외
    return {w for w in normalize_headline(text).split() if len(w) > min_word_len}


def headline_similarity(a: str, b: str, min_word_len: int = 3) -> float:
    return jaccard(significant_words(a, min_word_len), significant_words(b, min_word_len))


class DedupeEngine:
    """Merge LLM-extracted stories that describe the same event.

    Identity is headline similarity: the Jaccard index over significant words.
    A candidate joins the most similar story in the working set when that
    similarity is strictly above the threshold; otherwise it becomes a new
    story. The working set is owned by the caller and lives for one run.
    """

    def __init__(
        self,
        *,
        threshold: float = 0.5,
        min_word_len: int = 3,
        id_factory: Callable[[str], str] | None = None,
    ) -> None:
        self._threshold = threshold
        self._min_word_len = min_word_len
        self._seq = itertools.count(1)
        self._id_factory = id_factory or self._default_id

    def _default_id(self, headline: str) -> str:
        return stable_id(str(next(self._seq)), headline)

    def find_match(
        self, headline: str, working_set: dict[str, CuratedStory]
    ) -> tuple[CuratedStory | None, float]:
        words = significant_words(headline, self._min_word_len)
        best: CuratedStory | None = None
        best_sim = 0.0
        for story in working_set.values():
            sim = jaccard(words, significant_words(story.headline, self._min_word_len))
            # 동점이면 먼저 들어온 스토리 유지 (strict >)
            if sim > self._threshold and sim > best_sim:
                best = story
                best_sim = sim
        return best, best_sim

    def merge_or_insert(
        self,
        candidate: RawExtractedStory,
        source_name: str,
        working_set: dict[str, CuratedStory],
        published_at: datetime.datetime,
    ) -> CuratedStory:
        target, _ = self.find_match(candidate.headline, working_set)
        if target is not None:
            if source_name not in target.sources:
                target.sources.append(source_name)
                target.cross_source_count += 1
            if candidate.base_score > target.base_score:
                target.base_score = candidate.base_score
                target.headline = candidate.headline
                target.summary = candidate.summary
            return target

        story = CuratedStory(
            id=self._id_factory(candidate.headline),
            headline=candidate.headline,
            summary=candidate.summary,
            category=candidate.category,
            base_score=candidate.base_score,
            published_at=published_at,
            sources=[source_name],
            cross_source_count=1,
            entities=list(candidate.entities),
            original_url=candidate.original_url,
        )
        working_set[story.id] = story
        return story
