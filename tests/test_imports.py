def test_package_imports() -> None:
    import newsletter_curator  # noqa: F401

    from newsletter_curator.core import config  # noqa: F401
    from newsletter_curator.export import export_manager  # noqa: F401

    try:
        import pytest
    except Exception:
        return
    pytest.importorskip("feedparser")
    pytest.importorskip("bs4")
    from newsletter_curator.processing import pipeline  # noqa: F401
    from newsletter_curator.export import curation_exporter  # noqa: F401


def test_default_data_paths() -> None:
    from newsletter_curator.core.config import OUTPUT_JSON

    assert OUTPUT_JSON.endswith("/data/curated_stories.json") or OUTPUT_JSON.endswith(
        "\\data\\curated_stories.json"
    )


def test_default_feeds_are_well_formed() -> None:
    from newsletter_curator.core.config import RSS_FEEDS

    assert len(RSS_FEEDS) >= 10
    for feed in RSS_FEEDS:
        assert feed["name"]
        assert feed["url"].startswith("http")
        assert feed["tier"] in {1, 2, 3, 4}
