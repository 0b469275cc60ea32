from __future__ import annotations

import datetime

from newsletter_curator.models import NewsItem
from newsletter_curator.processing.sampling import select_candidates

BASE = datetime.datetime(2024, 6, 1, tzinfo=datetime.timezone.utc)


def _item(source: str, n: int, hours: int) -> NewsItem:
    return NewsItem(
        id=f"{source}-{n}",
        title=f"{source} story {n}",
        url=f"https://{source}.example.com/{n}",
        source_url=f"https://{source}.example.com/feed",
        source_name=source,
        published_at=BASE + datetime.timedelta(hours=hours),
    )


def test_quota_then_fill_with_newest() -> None:
    # "busy"가 최신 기사를 모두 가지고 있어도 다른 소스가 쿼터만큼 들어가야 함
    items = [_item("busy", i, 100 + i) for i in range(10)]
    items += [_item("quiet", i, i) for i in range(3)]
    items += [_item("rare", 0, 50)]

    selected = select_candidates(items, per_source_quota=2, total_cap=7)

    ids = [i.id for i in selected]
    assert len(selected) == 7
    assert {"quiet-2", "quiet-1", "rare-0"} <= set(ids)
    assert "quiet-0" not in ids
    # busy: 쿼터 2개 + 채우기 2개 (전체 최신순)
    assert [i for i in ids if i.startswith("busy")] == ["busy-9", "busy-8", "busy-7", "busy-6"]
    assert [i.published_at for i in selected] == sorted((i.published_at for i in selected), reverse=True)


def test_every_source_gets_a_slot_when_quotas_exceed_cap() -> None:
    items = [_item(f"src{s}", n, s * 10 + n) for s in range(12) for n in range(3)]

    selected = select_candidates(items, per_source_quota=2, total_cap=20)

    assert len(selected) == 20
    assert {i.source_name for i in selected} == {f"src{s}" for s in range(12)}


def test_never_exceeds_cap_and_no_duplicates() -> None:
    items = [_item("a", n, n) for n in range(5)]
    items.append(items[0])

    selected = select_candidates(items, per_source_quota=2, total_cap=20)

    assert len(selected) == 5
    assert len({i.url for i in selected}) == 5
    assert select_candidates(items, total_cap=0) == []
    assert select_candidates([], per_source_quota=2, total_cap=20) == []


def test_quota_picks_survive_even_split() -> None:
    items = [_item(f"src{s}", n, s * 100 + n) for s in range(5) for n in range(10)]

    selected = select_candidates(items, per_source_quota=2, total_cap=20)

    ids = {i.id for i in selected}
    assert len(selected) == 20
    for s in range(5):
        assert {f"src{s}-9", f"src{s}-8"} <= ids
    assert [i.published_at for i in selected] == sorted((i.published_at for i in selected), reverse=True)
