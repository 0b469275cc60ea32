from __future__ import annotations

from typing import Any, Callable, Protocol

from newsletter_curator.models import CurationProgress


class LLMClient(Protocol):
    def complete(
        self,
        prompt: str,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str | None: ...


LogFunc = Callable[[str], None]
SleepFunc = Callable[[float], Any]
ProgressFunc = Callable[[CurationProgress], None]
