"""Shared text/date helpers."""

from .common import (
    clean_text,
    dedupe_keep_order,
    isoformat_utc,
    jaccard,
    normalize_text,
    normalize_title_key,
    parse_datetime_utc,
    stable_id,
    struct_time_to_utc,
    truncate,
    utc_now,
)

__all__ = [
    "clean_text",
    "dedupe_keep_order",
    "isoformat_utc",
    "jaccard",
    "normalize_text",
    "normalize_title_key",
    "parse_datetime_utc",
    "stable_id",
    "struct_time_to_utc",
    "truncate",
    "utc_now",
]
