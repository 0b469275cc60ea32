from __future__ import annotations

import argparse
import datetime
import json
from typing import Any, Sequence

from newsletter_curator.core.config import OUTPUT_JSON, get_api_key
from newsletter_curator.export.export_manager import export_curation_json
from newsletter_curator.models import CurationProgress
from newsletter_curator.processing.pipeline import ConfigurationError, build_default_pipeline

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_FAILURE = 2


def _log(message: str) -> None:
    ts = datetime.datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {message}")


def _log_progress(progress: CurationProgress) -> None:
    if progress.stage == "extracting":
        _log(f"({progress.current}/{progress.total}) {progress.message}")
    else:
        _log(progress.message)


def _load_custom_feeds(path: str | None) -> list[dict[str, Any]]:
    if not path:
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("feeds") or []
    if not isinstance(data, list):
        raise ValueError("feeds file must contain a JSON list")
    return [f for f in data if isinstance(f, dict)]


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="newsletter-curator",
        description="Fetch AI news feeds, extract and merge stories, and export the ranked list as JSON.",
    )
    parser.add_argument("--api-key", default=None, help="OpenRouter API key (default: $OPENROUTER_API_KEY)")
    parser.add_argument("--output", default=OUTPUT_JSON, help="output JSON path")
    parser.add_argument("--feeds-json", default=None, help="JSON file with extra feeds [{name, url, ...}]")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    api_key = (args.api_key or "").strip() or get_api_key()
    try:
        _log("프로그램 시작")
        custom_feeds = _load_custom_feeds(args.feeds_json)
        pipeline = build_default_pipeline(logger=_log)
        result = pipeline.run(api_key, custom_feeds, on_progress=_log_progress)
        export_curation_json(result, args.output)
        _log(f"완료! {args.output} 파일이 생성되었습니다. (스토리 {len(result.stories)}개)")
        return EXIT_OK
    except ConfigurationError as e:
        print("❌ 설정 오류:", e)
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print("❌ 오류 발생:", e)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
