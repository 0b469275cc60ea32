from __future__ import annotations

import datetime
from typing import Iterable

from newsletter_curator.core.constants import (
    CATEGORY_BOOST,
    CROSS_SOURCE_BOOST_THREE_PLUS,
    CROSS_SOURCE_BOOST_TWO,
    MAX_FINAL_SCORE,
    RECENCY_BOOST,
    RECENCY_BOOST_HOURS,
)
from newsletter_curator.models import CuratedStory


class StoryScorer:
    def __init__(
        self,
        *,
        min_score_to_show: int = 6,
        category_boost: dict[str, int] | None = None,
        recency_hours: int = RECENCY_BOOST_HOURS,
        max_score: int = MAX_FINAL_SCORE,
    ) -> None:
        self._min_score_to_show = min_score_to_show
        self._category_boost = dict(CATEGORY_BOOST if category_boost is None else category_boost)
        self._recency_window = datetime.timedelta(hours=recency_hours)
        self._max_score = max_score

    def score(self, story: CuratedStory, now: datetime.datetime) -> CuratedStory:
        # 가산점은 점수가 실제로 바뀔 때만 boosts에 기록
        score = story.base_score
        boosts: list[str] = []

        if story.cross_source_count >= 3:
            score += CROSS_SOURCE_BOOST_THREE_PLUS
            boosts.append(f"+{CROSS_SOURCE_BOOST_THREE_PLUS} (3+ sources)")
        elif story.cross_source_count == 2:
            score += CROSS_SOURCE_BOOST_TWO
            boosts.append(f"+{CROSS_SOURCE_BOOST_TWO} (2 sources)")

        category = story.category.value
        category_boost = self._category_boost.get(category, 0)
        if category_boost:
            score += category_boost
            boosts.append(f"+{category_boost} ({category})")

        # 미래 시각(피드 시계 오차)도 최근으로 간주
        if now - story.published_at < self._recency_window:
            score += RECENCY_BOOST
            boosts.append(f"+{RECENCY_BOOST} (recent)")

        story.final_score = min(score, self._max_score)
        story.boosts = boosts
        return story

    def score_all(self, stories: Iterable[CuratedStory], now: datetime.datetime) -> list[CuratedStory]:
        return [self.score(story, now) for story in stories]

    def rank_and_filter(
        self,
        stories: Iterable[CuratedStory],
        min_score: int | None = None,
    ) -> list[CuratedStory]:
        threshold = self._min_score_to_show if min_score is None else min_score
        kept = [s for s in stories if s.final_score >= threshold]
        # sorted는 안정 정렬이므로 동점은 입력 순서 유지
        return sorted(kept, key=lambda s: s.final_score, reverse=True)
