from __future__ import annotations

import datetime
from collections import Counter
from typing import Any, Callable, Iterable, Sequence

from newsletter_curator.core.config import (
    ARTICLE_FETCH_MAX_CHARS,
    ARTICLE_FETCH_MIN_INLINE_CHARS,
    CANDIDATE_TOTAL_CAP,
    CURATION_MAX_AGE_DAYS,
    EXTRACTION_DELAY_SEC,
    EXTRACTION_MAX_TOKENS,
    EXTRACTION_MIN_CONTENT_CHARS,
    EXTRACTION_TEMPERATURE,
    FEED_FETCH_MAX_WORKERS,
    FEED_FETCH_TIMEOUT_SEC,
    FEED_SUMMARY_MAX_CHARS,
    MAX_ENTRIES_PER_FEED,
    MIN_SCORE_TO_SHOW,
    OPENROUTER_MODEL,
    PER_SOURCE_QUOTA,
    TITLE_MERGE_JACCARD,
    TITLE_MIN_WORD_LEN,
    get_api_key,
    get_default_feeds,
)
from newsletter_curator.models import (
    CuratedStory,
    CurationProgress,
    CurationResult,
    CurationStats,
    FeedSource,
    NewsItem,
    SourceBreakdown,
)
from newsletter_curator.processing.dedupe import DedupeEngine
from newsletter_curator.processing.extractor import StoryExtractor
from newsletter_curator.processing.llm_client import OpenRouterClient
from newsletter_curator.processing.sampling import select_candidates
from newsletter_curator.processing.scheduler import SequentialScheduler
from newsletter_curator.processing.scoring import StoryScorer
from newsletter_curator.processing.types import LogFunc, ProgressFunc
from newsletter_curator.scrapers.content_resolver import ContentResolver
from newsletter_curator.scrapers.content_resolver_config import ContentResolverConfig
from newsletter_curator.scrapers.feed_reader import FeedReader, filter_by_date
from newsletter_curator.utils import utc_now

FeedLike = FeedSource | dict[str, Any]
ExtractorFactory = Callable[[str], StoryExtractor]


class ConfigurationError(ValueError):
    """Raised when the pipeline cannot start (missing credentials)."""


def _noop_log(_: str) -> None:
    return None


def _as_feed_source(feed: FeedLike) -> FeedSource:
    return feed if isinstance(feed, FeedSource) else FeedSource.from_dict(feed)


class CurationPipeline:
    def __init__(
        self,
        *,
        feed_reader: FeedReader,
        content_resolver: ContentResolver,
        extractor_factory: ExtractorFactory,
        dedupe_engine: DedupeEngine,
        scorer: StoryScorer,
        scheduler: SequentialScheduler,
        logger: LogFunc,
        default_feeds: Sequence[FeedLike] = (),
        per_source_quota: int = 2,
        total_cap: int = 20,
        max_age_days: int = 7,
        now_provider: Callable[[], datetime.datetime] | None = None,
    ) -> None:
        self._feed_reader = feed_reader
        self._content_resolver = content_resolver
        self._extractor_factory = extractor_factory
        self._dedupe_engine = dedupe_engine
        self._scorer = scorer
        self._scheduler = scheduler
        self._log = logger
        self._default_feeds = [_as_feed_source(f) for f in default_feeds]
        self._per_source_quota = per_source_quota
        self._total_cap = total_cap
        self._max_age_days = max_age_days
        self._now_provider = now_provider or utc_now

    def _emit(
        self,
        on_progress: ProgressFunc | None,
        stage: str,
        current: int,
        total: int,
        message: str,
    ) -> None:
        if on_progress is None:
            return
        try:
            on_progress(CurationProgress(stage=stage, current=current, total=total, message=message))
        except Exception as e:
            # 진행 콜백 오류가 큐레이션을 중단시키지 않도록
            self._log(f"⚠️ 진행 콜백 오류: {type(e).__name__}: {e}")

    def collect_feeds(self, custom_feeds: Iterable[FeedLike] | None = None) -> list[FeedSource]:
        feeds = list(self._default_feeds)
        for feed in custom_feeds or []:
            source = _as_feed_source(feed)
            if source.url:
                feeds.append(source)
        return feeds

    def build_stats(
        self,
        feeds: Sequence[FeedSource],
        found_by_source: Counter,
        kept_by_source: Counter,
        processed: int,
    ) -> CurationStats:
        names: list[str] = []
        for feed in feeds:
            if feed.name not in names:
                names.append(feed.name)
        breakdown = [
            SourceBreakdown(
                source_name=name,
                found=found_by_source.get(name, 0),
                kept=kept_by_source.get(name, 0),
            )
            for name in names
        ]
        breakdown.sort(key=lambda b: b.kept, reverse=True)
        return CurationStats(
            sources_analyzed=len(feeds),
            total_articles_found=sum(found_by_source.values()),
            articles_processed=processed,
            breakdown=breakdown,
        )

    def run(
        self,
        api_key: str | None,
        custom_feeds: Iterable[FeedLike] | None = None,
        on_progress: ProgressFunc | None = None,
    ) -> CurationResult:
        key = (api_key or "").strip()
        if not key:
            raise ConfigurationError("API key required")

        feeds = self.collect_feeds(custom_feeds)
        self._log(f"큐레이션 시작: 피드 {len(feeds)}개")
        self._emit(on_progress, "fetching", 0, len(feeds), f"Fetching {len(feeds)} feeds...")

        items = self._feed_reader.fetch_all(feeds)
        now = self._now_provider()
        if self._max_age_days > 0:
            items = filter_by_date(items, self._max_age_days, now=now)
        found_by_source = Counter(item.source_name for item in items)
        self._log(f"수집 완료: 최근 {self._max_age_days}일 기사 {len(items)}개")

        candidates = select_candidates(
            items,
            per_source_quota=self._per_source_quota,
            total_cap=self._total_cap,
        )
        self._log(f"분석 대상 선별: {len(candidates)}개")

        extractor = self._extractor_factory(key)
        working_set: dict[str, CuratedStory] = {}
        kept_by_source: Counter = Counter()
        total = len(candidates)
        processed = 0

        def _process(item: NewsItem) -> None:
            nonlocal processed
            processed += 1
            kept_by_source[item.source_name] += 1
            self._emit(
                on_progress,
                "extracting",
                processed,
                total,
                f"Analyzing [{item.source_name}] {item.title[:30]}...",
            )
            content = self._content_resolver.resolve(item)
            stories = extractor.extract(item, content)
            for story in stories:
                self._dedupe_engine.merge_or_insert(story, item.source_name, working_set, item.published_at)
            self._log(
                f"추출({processed}/{total}): [{item.source_name}] "
                f"스토리 {len(stories)}개, 누적 {len(working_set)}개"
            )

        self._scheduler.run(candidates, _process)

        self._emit(on_progress, "scoring", total, total, "Scoring and ranking stories...")
        scored = self._scorer.score_all(working_set.values(), self._now_provider())
        ranked = self._scorer.rank_and_filter(scored)
        stats = self.build_stats(feeds, found_by_source, kept_by_source, len(candidates))
        self._log(f"큐레이션 완료: 스토리 {len(working_set)}개 중 {len(ranked)}개 선정")
        self._emit(on_progress, "done", total, total, f"Curated {len(ranked)} stories")
        return CurationResult(stories=ranked, stats=stats)


def curate(
    api_key: str | None = None,
    custom_feeds: Iterable[FeedLike] | None = None,
    *,
    pipeline: CurationPipeline | None = None,
    on_progress: ProgressFunc | None = None,
    logger: LogFunc | None = None,
) -> dict[str, Any]:
    """Run a curation and return the JSON-ready response payload."""
    log = logger or print
    key = (api_key or "").strip() or get_api_key()
    if not key:
        return {"success": False, "error": "API key required"}
    runner = pipeline or build_default_pipeline(logger=log)
    try:
        result = runner.run(key, custom_feeds, on_progress)
    except ConfigurationError as e:
        return {"success": False, "error": str(e) or "API key required"}
    except Exception as e:
        log(f"❌ 큐레이션 실패: {type(e).__name__}: {e}")
        return {"success": False, "error": "Curation failed"}
    return result.to_dict()


def build_default_feed_reader() -> FeedReader:
    return FeedReader(
        max_entries_per_feed=MAX_ENTRIES_PER_FEED,
        timeout_sec=FEED_FETCH_TIMEOUT_SEC,
        max_workers=FEED_FETCH_MAX_WORKERS,
        summary_max_chars=FEED_SUMMARY_MAX_CHARS,
    )


def build_default_content_resolver() -> ContentResolver:
    return ContentResolver(
        ContentResolverConfig(
            max_chars=ARTICLE_FETCH_MAX_CHARS,
            min_inline_chars=ARTICLE_FETCH_MIN_INLINE_CHARS,
        )
    )


def build_default_extractor(api_key: str, *, logger: LogFunc | None = None) -> StoryExtractor:
    return StoryExtractor(
        OpenRouterClient(api_key),
        model=OPENROUTER_MODEL,
        temperature=EXTRACTION_TEMPERATURE,
        max_tokens=EXTRACTION_MAX_TOKENS,
        min_content_chars=EXTRACTION_MIN_CONTENT_CHARS,
        max_content_chars=ARTICLE_FETCH_MAX_CHARS,
        logger=logger,
    )


def build_default_dedupe_engine() -> DedupeEngine:
    return DedupeEngine(threshold=TITLE_MERGE_JACCARD, min_word_len=TITLE_MIN_WORD_LEN)


def build_default_pipeline(*, logger: LogFunc = _noop_log) -> CurationPipeline:
    return CurationPipeline(
        feed_reader=build_default_feed_reader(),
        content_resolver=build_default_content_resolver(),
        extractor_factory=lambda key: build_default_extractor(key, logger=logger),
        dedupe_engine=build_default_dedupe_engine(),
        scorer=StoryScorer(min_score_to_show=MIN_SCORE_TO_SHOW),
        scheduler=SequentialScheduler(EXTRACTION_DELAY_SEC),
        logger=logger,
        default_feeds=get_default_feeds(),
        per_source_quota=PER_SOURCE_QUOTA,
        total_cap=CANDIDATE_TOTAL_CAP,
        max_age_days=CURATION_MAX_AGE_DAYS,
    )
