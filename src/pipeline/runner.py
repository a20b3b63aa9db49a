"""Pipeline orchestration for one Weave run.

The strings and analytics pipelines run one after the other. Each
downloads its sources in order, parses them, validates the strands and
writes the platform files. A source that fails to download contributes
no strands; every other failure is fatal and propagates as ``WeaveError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from core.config import AnalyticsConfig, Source, StringsConfig, WeaveConfig
from core.errors import WeaveConfigError
from core.logging_config import get_logger
from core.platform import Platform, parse_platform
from core.types import Strand
from ingest.analytics_ingest import parse_analytics_strands
from ingest.csv_download import CsvDownloader
from ingest.csv_parsing import IngestSettings
from ingest.string_ingest import parse_string_strands
from output.analytics_writer import write_analytics
from output.file_output import open_output
from output.string_writer import write_strings
from transforms.duplicate_resolution import resolve_duplicate_analytics, resolve_duplicate_strings
from transforms.key_validation import validate_keys
from transforms.translation_completeness import check_translation_completeness

_LOGGER = get_logger(__name__)

CsvFetcher = Callable[[Source], Optional[str]]
SourceParser = Callable[[Source, str], list[Strand]]


@dataclass
class WeaveReport:
    """Outcome of a Weave run.

    Attributes:
        platform: Resolved output platform.
        string_count: Strands kept by the strings pipeline.
        analytics_count: Strands kept by the analytics pipeline.
        written_files: Paths of generated files, in write order.
        failed_sources: Titles of sources that could not be downloaded.
    """

    platform: Platform
    string_count: int = 0
    analytics_count: int = 0
    written_files: list[str] = field(default_factory=list)
    failed_sources: list[str] = field(default_factory=list)


class WeaveRunner:
    """Runs the strings and analytics pipelines for one configuration."""

    def __init__(self, config: WeaveConfig, fetch_csv: CsvFetcher | None = None) -> None:
        self._config = config
        self._fetch_csv = fetch_csv or CsvDownloader()
        self._platform = parse_platform(config.platform)
        self._settings = IngestSettings(
            key_column_name=config.key_column_name,
            platforms_column_name=config.platforms_column_name,
            header_marker=config.header_column_name,
            platform=self._platform,
        )
        self._report = WeaveReport(platform=self._platform)

    def run(self) -> WeaveReport:
        """Execute both pipelines and return the run report."""
        if self._config.strings is None:
            _LOGGER.warning("strings_config_missing", message="No Strings config found")
        else:
            self._run_strings(self._config.strings)
        if self._config.analytics is None:
            _LOGGER.warning("analytics_config_missing", message="No Analytics config found")
        else:
            self._run_analytics(self._config.analytics)
        return self._report

    def _run_strings(self, config: StringsConfig) -> None:
        if not config.languages:
            raise WeaveConfigError(
                "Strings config has no languages. Please provide at least one language."
            )
        downloaded = self._download_all(
            config.sources,
            lambda source, text: parse_string_strands(config, source, text, self._settings),
        )
        strands = validate_keys(downloaded)
        strands = resolve_duplicate_strings(strands)
        strands = check_translation_completeness(strands, len(config.languages))
        self._report.string_count = len(strands)
        if not strands:
            _LOGGER.warning("strings_empty", message="No Strings to write")
            return
        for language in config.languages:
            with open_output(language.path, language.id) as handle:
                write_strings(handle, self._platform, language, strands)
            self._report.written_files.append(language.path)
        _LOGGER.info("strings_completed", strand_count=len(strands))

    def _run_analytics(self, config: AnalyticsConfig) -> None:
        if self._platform is Platform.ANDROID and config.package_name is None:
            raise WeaveConfigError(
                "Analytics config has no packageName. Please provide a package name for Android."
            )
        downloaded = self._download_all(
            config.sources,
            lambda source, text: parse_analytics_strands(config, source, text, self._settings),
        )
        strands = validate_keys(downloaded)
        strands = resolve_duplicate_analytics(strands)
        self._report.analytics_count = len(strands)
        if not strands:
            _LOGGER.warning("analytics_empty", message="No Analytics Strings to write")
            return
        with open_output(config.path, "Analytics") as handle:
            write_analytics(handle, self._platform, config, strands)
        self._report.written_files.append(config.path)
        _LOGGER.info("analytics_completed", strand_count=len(strands))

    def _download_all(self, sources: Iterable[Source], parse: SourceParser) -> list[Strand]:
        strands: list[Strand] = []
        for source in sources:
            csv_text = self._fetch_csv(source)
            if csv_text is None:
                _LOGGER.warning("source_skipped", source=source.title, url=source.url)
                self._report.failed_sources.append(source.title)
                continue
            strands.extend(parse(source, csv_text))
        return strands


def run_weave(config: WeaveConfig, fetch_csv: CsvFetcher | None = None) -> WeaveReport:
    """Run every configured pipeline.

    Args:
        config: Validated configuration.
        fetch_csv: Optional source fetcher, defaults to ``CsvDownloader``.

    Returns:
        Run report.

    Raises:
        WeaveConfigError: For invalid platform, languages, columns or package.
        WeaveIngestError: If a CSV has no key column.
        WeaveOutputError: If an output file cannot be written.
    """
    return WeaveRunner(config, fetch_csv).run()
