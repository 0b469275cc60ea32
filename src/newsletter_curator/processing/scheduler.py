from __future__ import annotations

import time
from typing import Callable, Iterable, TypeVar

from newsletter_curator.processing.types import SleepFunc

T = TypeVar("T")
R = TypeVar("R")


class SequentialScheduler:
    """Run calls one at a time with a fixed pause between them."""

    def __init__(self, delay_sec: float, *, sleep_func: SleepFunc = time.sleep) -> None:
        self._delay_sec = max(0.0, float(delay_sec))
        self._sleep = sleep_func

    def run(self, items: Iterable[T], func: Callable[[T], R]) -> list[R]:
        results: list[R] = []
        for index, item in enumerate(items):
            if index > 0 and self._delay_sec > 0:
                self._sleep(self._delay_sec)
            results.append(func(item))
        return results
