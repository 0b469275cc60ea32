from __future__ import annotations

import datetime
import email.utils
import hashlib
import html
import re
import time
from typing import Any

_WS_RE = re.compile(r"\s+")  # 연속 공백을 단일 공백으로 축약
_TAG_RE = re.compile(r"<[^>]+>")  # 피드 요약에 섞인 HTML 태그 제거용
_NON_ALNUM_WS_RE = re.compile(r"[^a-z0-9\s]")  # 헤드라인 비교용 정규화
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")  # 피드 제목 중복 키 (공백까지 제거)


def clean_text(s: str) -> str:
    """HTML 엔티티/태그를 제거하고 공백을 정리한 깔끔한 텍스트로 정규화."""
    if not s:
        return ""
    # 1) &amp; &#8217; 같은 엔티티(숫자/스마트 따옴표/대시 포함)를 문자로 변환
    s = html.unescape(s)

    # 2) NBSP(유니코드) -> 일반 스페이스로
    s = s.replace("\u00a0", " ")

    # 3) 태그 제거
    s = _TAG_RE.sub("", s)

    # 4) 공백 정리
    return _WS_RE.sub(" ", s).strip()


def truncate(text: str, max_chars: int) -> str:
    if not text or max_chars <= 0:
        return text or ""
    return text[:max_chars]


def normalize_text(text: str) -> str:
    """소문자화 후 영숫자/공백만 남기고 공백을 정리 (헤드라인 유사도 비교용)."""
    t = (text or "").lower()
    t = _NON_ALNUM_WS_RE.sub("", t)
    return _WS_RE.sub(" ", t).strip()


def normalize_title_key(title: str) -> str:
    """피드 단계 제목 중복 키: 소문자 영숫자만 남긴다."""
    return _NON_ALNUM_RE.sub("", (title or "").lower())


def jaccard(a: set[str], b: set[str]) -> float:
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def stable_id(*parts: str, length: int = 12) -> str:
    raw = "-".join(parts)
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()[:length]


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def struct_time_to_utc(value: Any) -> datetime.datetime | None:
    # feedparser의 *_parsed 값(time.struct_time, UTC 기준)을 datetime으로 변환
    if not value:
        return None
    try:
        return datetime.datetime(*value[:6], tzinfo=datetime.timezone.utc)
    except Exception:
        return None


def parse_datetime_utc(value: Any) -> datetime.datetime | None:
    if not value:
        return None
    if isinstance(value, datetime.datetime):
        dt = value
    elif isinstance(value, time.struct_time):
        return struct_time_to_utc(value)
    else:
        raw = str(value).strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.datetime.fromisoformat(raw)
        except Exception:
            try:
                dt = email.utils.parsedate_to_datetime(raw)
            except Exception:
                return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def isoformat_utc(dt: datetime.datetime) -> str:
    return dt.astimezone(datetime.timezone.utc).isoformat().replace("+00:00", "Z")


def dedupe_keep_order(values: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out
