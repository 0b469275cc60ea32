from __future__ import annotations

from newsletter_curator.processing.scheduler import SequentialScheduler


def test_run_sleeps_between_calls_only() -> None:
    events: list[str] = []

    def fake_sleep(sec: float) -> None:
        events.append(f"sleep:{sec}")

    def work(x: int) -> int:
        events.append(f"call:{x}")
        return x * 2

    results = SequentialScheduler(0.3, sleep_func=fake_sleep).run([1, 2, 3], work)

    assert results == [2, 4, 6]
    assert events == ["call:1", "sleep:0.3", "call:2", "sleep:0.3", "call:3"]


def test_zero_delay_and_empty_input_never_sleep() -> None:
    slept: list[float] = []
    assert SequentialScheduler(0, sleep_func=slept.append).run([1, 2], lambda x: x) == [1, 2]
    assert SequentialScheduler(1.0, sleep_func=slept.append).run([], lambda x: x) == []
    assert slept == []
