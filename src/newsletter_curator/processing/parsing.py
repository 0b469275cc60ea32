from __future__ import annotations

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"```(?:json)?", flags=re.IGNORECASE)
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").replace("```", "").strip()


def strip_trailing_commas(payload: str) -> str:
    return _TRAILING_COMMA_RE.sub(r"\1", payload)


def _try_load_json(payload: str) -> Any:
    try:
        return json.loads(payload)
    except (TypeError, ValueError, RecursionError):
        return None


def _extract_block(payload: str, open_ch: str, close_ch: str) -> str | None:
    # 가장 바깥 괄호 블록을 깊이 추적으로 잘라낸다 (문자열 안의 괄호도 고려)
    start = payload.find(open_ch)
    if start == -1:
        return None
    depth = 0
    in_str = False
    escaped = False
    for i in range(start, len(payload)):
        ch = payload[i]
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return payload[start : i + 1]
    return None


def _as_list(obj: Any) -> list[Any] | None:
    if isinstance(obj, list):
        return obj
    if isinstance(obj, dict):
        # {"stories": [...]} 래핑 해제, 단일 객체는 1개짜리 배열로 취급
        stories = obj.get("stories")
        if isinstance(stories, list):
            return stories
        return [obj]
    return None


def parse_json_array(text: str) -> list[Any] | None:
    """LLM 응답 문자열을 JSON 배열로 복구한다. 실패하면 None."""
    if not text or not text.strip():
        return None
    raw = strip_code_fences(text)

    parsed = _as_list(_try_load_json(raw))
    if parsed is not None:
        return parsed

    # 먼저 등장하는 괄호 종류부터 시도 (객체 안의 entities 배열만 잘려 나오는 것 방지)
    pairs = sorted((("[", "]"), ("{", "}")), key=lambda p: raw.find(p[0]) % (len(raw) + 1))
    for open_ch, close_ch in pairs:
        block = _extract_block(raw, open_ch, close_ch)
        if not block:
            continue
        parsed = _as_list(_try_load_json(block))
        if parsed is not None:
            return parsed
        parsed = _as_list(_try_load_json(strip_trailing_commas(block)))
        if parsed is not None:
            return parsed
    return None
