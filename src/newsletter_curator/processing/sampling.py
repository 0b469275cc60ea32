from __future__ import annotations

from collections import OrderedDict
from typing import Iterable

from newsletter_curator.models import NewsItem


def _item_key(item: NewsItem) -> str:
    return item.url or item.id


def select_candidates(
    items: Iterable[NewsItem],
    per_source_quota: int = 2,
    total_cap: int = 20,
) -> list[NewsItem]:
    """Pick a source-diverse, bounded set of items to send to the LLM.

    Each source contributes up to ``per_source_quota`` of its newest items,
    taken round-robin so a large number of sources cannot starve the later
    ones before the cap. Leftover capacity is filled with the newest items
    overall. The result is newest-first and never longer than ``total_cap``.
    """
    if total_cap <= 0:
        return []

    ordered = sorted(items, key=lambda x: x.published_at, reverse=True)
    groups: "OrderedDict[str, list[NewsItem]]" = OrderedDict()
    for item in ordered:
        groups.setdefault(item.source_name, []).append(item)

    selected: list[NewsItem] = []
    seen: set[str] = set()

    def _take(item: NewsItem) -> bool:
        key = _item_key(item)
        if key in seen:
            return False
        seen.add(key)
        selected.append(item)
        return True

    # 1) 소스별 쿼터: 각 소스의 n번째 최신 기사를 라운드 로빈으로
    for rank in range(max(0, per_source_quota)):
        for group in groups.values():
            if len(selected) >= total_cap:
                break
            if rank < len(group):
                _take(group[rank])

    # 2) 남는 자리는 전체 최신순으로 채움
    for item in ordered:
        if len(selected) >= total_cap:
            break
        _take(item)

    selected.sort(key=lambda x: x.published_at, reverse=True)
    return selected[:total_cap]
