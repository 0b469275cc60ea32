from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional

import requests

from newsletter_curator.core.config import (
    OPENROUTER_API_BASE,
    OPENROUTER_REFERER,
    OPENROUTER_TIMEOUT_SEC,
    OPENROUTER_TITLE,
)

logger = logging.getLogger(__name__)

_AI_UNAVAILABLE_LOGGED: set[str] = set()

HttpPost = Callable[..., Any]


def log_ai_unavailable(reason: str) -> None:
    # LLM 호출 실패 사유를 중복 없이 로그 출력
    if reason in _AI_UNAVAILABLE_LOGGED:
        return
    logger.warning("LLM 추출 비활성: %s", reason)
    _AI_UNAVAILABLE_LOGGED.add(reason)


def reset_unavailable_log() -> None:
    _AI_UNAVAILABLE_LOGGED.clear()


def _extract_message_text(payload: dict[str, Any]) -> str:
    # chat-completions 응답에서 첫 choice의 텍스트만 추출
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content.strip() if isinstance(content, str) else ""


class OpenRouterClient:
    """Minimal OpenRouter chat-completions client.

    Returns the assistant text, or None on any failure. There are no retries;
    the caller substitutes a fallback result.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_base: str = OPENROUTER_API_BASE,
        timeout_sec: int = OPENROUTER_TIMEOUT_SEC,
        referer: str = OPENROUTER_REFERER,
        title: str = OPENROUTER_TITLE,
        http_post: Optional[HttpPost] = None,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._url = f"{api_base.rstrip('/')}/chat/completions"
        self._timeout_sec = timeout_sec
        self._referer = referer
        self._title = title
        self._http_post = http_post or requests.post

    def complete(
        self,
        prompt: str,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        if not self._api_key:
            log_ai_unavailable("OPENROUTER_API_KEY 미설정")
            return None
        try:
            resp = self._http_post(
                self._url,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                    "HTTP-Referer": self._referer,
                    "X-Title": self._title,
                },
                json={
                    "model": model,
                    "messages": [{"role": "user", "content": prompt}],
                    "temperature": temperature,
                    "max_tokens": max_tokens,
                },
                timeout=self._timeout_sec,
            )
        except Exception as e:
            log_ai_unavailable(f"OpenRouter 호출 실패: {type(e).__name__}")
            logger.debug("openrouter_request_error: %s", e)
            return None

        if not resp.ok:
            snippet = re.sub(r"\s+", " ", resp.text or "")[:160]
            log_ai_unavailable(f"OpenRouter 호출 실패: {resp.status_code}")
            logger.debug("openrouter_http_error: %s %s", resp.status_code, snippet)
            return None

        try:
            data = resp.json()
        except ValueError:
            log_ai_unavailable("OpenRouter 응답 JSON 파싱 실패")
            return None

        text = _extract_message_text(data)
        if not text:
            log_ai_unavailable("OpenRouter 응답 텍스트 비어있음")
            return None
        return text
