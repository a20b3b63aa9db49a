"""Integration tests for the full strings and analytics pipelines."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from core.config import (
    AnalyticsConfig,
    Language,
    Source,
    StringsConfig,
    WeaveConfig,
    WeaveRuntimeConfig,
)
from core.errors import WeaveConfigError, WeaveIngestError
from core.platform import Platform
from ingest.csv_download import CsvDownloader
from pipeline.runner import run_weave
from tests.fixture_paths import fixture_path

STRINGS_SOURCE = Source(title="Main", url="https://example.com/strings.csv")
MISSING_SOURCE = Source(title="Extra", url="https://example.com/missing.csv")
ANALYTICS_SOURCE = Source(title="Analytics", url="https://example.com/analytics.csv")

_FIXTURES = {
    STRINGS_SOURCE.url: "csv/strings.csv",
    ANALYTICS_SOURCE.url: "csv/analytics.csv",
}


def _fetch(source: Source) -> str | None:
    relative_path = _FIXTURES.get(source.url)
    if relative_path is None:
        return None
    return fixture_path(relative_path).read_text(encoding="utf-8")


def _config(tmp_path: Path, platform: str, package_name: str | None = "com.example") -> WeaveConfig:
    return WeaveConfig(
        platform=platform,
        strings=StringsConfig(
            languages=(
                Language(id="en", path=str(tmp_path / "en" / "strings.out")),
                Language(id="fr", path=str(tmp_path / "fr" / "strings.out")),
            ),
            sources=(MISSING_SOURCE, STRINGS_SOURCE),
        ),
        analytics=AnalyticsConfig(
            package_name=package_name,
            type_column_name="type",
            tag_column_name="tag",
            types=("Screen", "Event"),
            sources=(ANALYTICS_SOURCE,),
            path=str(tmp_path / "Analytics.kt"),
        ),
    )


def test_run_weave_android_writes_all_files(tmp_path: Path) -> None:
    """Android run writes both languages and the analytics object."""
    report = run_weave(_config(tmp_path, "android"), _fetch)

    english = (tmp_path / "en" / "strings.out").read_text(encoding="utf-8")
    french = (tmp_path / "fr" / "strings.out").read_text(encoding="utf-8")
    analytics = (tmp_path / "Analytics.kt").read_text(encoding="utf-8")
    assert report.platform is Platform.ANDROID
    assert report.failed_sources == ["Extra"]
    assert '<string name="greeting">Hi</string>' in english
    assert "Hello" not in english
    assert '<string name="farewell">Goodbye</string>' in english
    assert "farewell" not in french
    assert "ios_only" not in english
    assert "empty_row" not in english
    assert "<!-- Main Section -->" in french
    assert "package com.example" in analytics
    assert 'const val APP_OPEN = "App Open"' in analytics


def test_run_weave_web_outputs_valid_json(tmp_path: Path) -> None:
    """Web run keeps the platform-filtered row and produces parseable JSON."""
    config = _config(tmp_path, "Web", package_name=None)

    run_weave(config, _fetch)

    english = json.loads((tmp_path / "en" / "strings.out").read_text(encoding="utf-8"))
    analytics = json.loads((tmp_path / "Analytics.kt").read_text(encoding="utf-8"))
    assert english == {"greeting": "Hi", "ios_only": "iOS text", "farewell": "Goodbye"}
    assert analytics == {
        "app_open": "App Open",
        "screen": {"home": "Home Screen"},
        "event": {"login": "Login Tapped"},
    }


def test_run_weave_logs_failed_source_and_continues(tmp_path: Path) -> None:
    """A failed download contributes no strands but does not stop the run."""
    with capture_logs() as logs:
        report = run_weave(_config(tmp_path, "iOS"), _fetch)

    skipped = [entry for entry in logs if entry["event"] == "source_skipped"]
    assert [entry["source"] for entry in skipped] == ["Extra"]
    assert report.string_count == 4
    assert len(report.written_files) == 3


def test_run_weave_skips_writing_when_nothing_downloaded(tmp_path: Path) -> None:
    """Empty results log a warning and write no files."""
    with capture_logs() as logs:
        report = run_weave(_config(tmp_path, "iOS"), lambda source: None)

    assert report.written_files == []
    assert {"strings_empty", "analytics_empty"} <= {entry["event"] for entry in logs}


def test_run_weave_warns_for_missing_sections(tmp_path: Path) -> None:
    """Absent sections are valid and only logged."""
    with capture_logs() as logs:
        report = run_weave(WeaveConfig(platform="Web"), _fetch)

    assert report.written_files == []
    assert [entry["event"] for entry in logs] == [
        "strings_config_missing",
        "analytics_config_missing",
    ]


def test_run_weave_requires_android_package_name(tmp_path: Path) -> None:
    """Android analytics without a package name is fatal."""
    config = _config(tmp_path, "Android", package_name=None)
    config = WeaveConfig(platform=config.platform, analytics=config.analytics)

    with pytest.raises(WeaveConfigError, match="package name"):
        run_weave(config, _fetch)


def test_run_weave_rejects_unknown_platform(tmp_path: Path) -> None:
    """Unknown platform names stop the run before any download."""
    with pytest.raises(WeaveConfigError):
        run_weave(_config(tmp_path, "Symbian"), _fetch)


def test_run_weave_requires_languages(tmp_path: Path) -> None:
    """Strings config without languages is fatal."""
    config = WeaveConfig(
        platform="Web", strings=StringsConfig(languages=(), sources=(STRINGS_SOURCE,))
    )

    with pytest.raises(WeaveConfigError, match="at least one language"):
        run_weave(config, _fetch)


def test_run_weave_raises_for_missing_key_column(tmp_path: Path) -> None:
    """A source without the key column is fatal."""
    source = Source(title="Broken", url="https://example.com/broken.csv")
    config = WeaveConfig(
        platform="Web",
        strings=StringsConfig(
            languages=(Language(id="en", path=str(tmp_path / "en.json")),),
            sources=(source,),
        ),
    )

    def fetch(_: Source) -> str:
        return fixture_path("csv/no_key_column.csv").read_text(encoding="utf-8")

    with pytest.raises(WeaveIngestError, match="Broken"):
        run_weave(config, fetch)


def test_run_weave_skips_malformed_s3_source(tmp_path: Path) -> None:
    """An s3:// URL without an object key fails only its own source."""
    bucket_only = Source(title="Bucket", url="s3://bucket-only")
    downloader = CsvDownloader(WeaveRuntimeConfig())
    config = WeaveConfig(
        platform="Web",
        strings=StringsConfig(
            languages=(Language(id="en", path=str(tmp_path / "en.json")),),
            sources=(bucket_only, STRINGS_SOURCE),
        ),
    )

    def fetch(source: Source) -> str | None:
        return downloader(source) if source is bucket_only else _fetch(source)

    report = run_weave(config, fetch)

    assert report.failed_sources == ["Bucket"]
    assert json.loads((tmp_path / "en.json").read_text(encoding="utf-8"))["greeting"] == "Hi"
