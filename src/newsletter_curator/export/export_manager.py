from __future__ import annotations

import json
import os
from typing import Any

from newsletter_curator.models import CuratedStory, CurationResult
from newsletter_curator.utils import isoformat_utc, utc_now


def _safe_read_json(path: str, default: Any) -> Any:
    """JSON 파일을 안전하게 로드, 실패 시 기본값 반환."""
    if not os.path.exists(path):
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        return default


def _atomic_write_json(path: str, payload: dict) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)


def build_export_payload(result: CurationResult) -> dict[str, Any]:
    return {
        "lastUpdatedAt": isoformat_utc(utc_now()),
        "count": len(result.stories),
        "stories": [story.to_dict() for story in result.stories],
        "stats": result.stats.to_dict(),
    }


def export_curation_json(result: CurationResult, output_path: str) -> dict[str, Any]:
    payload = build_export_payload(result)
    _atomic_write_json(str(output_path), payload)
    return payload


def load_curated_stories(path: str) -> list[CuratedStory]:
    data = _safe_read_json(str(path), default=None)
    if not isinstance(data, dict):
        return []
    stories: list[CuratedStory] = []
    for raw in data.get("stories") or []:
        if not isinstance(raw, dict):
            continue
        try:
            stories.append(CuratedStory.from_dict(raw))
        except (TypeError, ValueError):
            # 손상된 항목은 건너뜀
            continue
    return stories
