"""Public SDK surface for Weave.

This module provides a stable import path for programmatic runs.
It re-exports the configuration models and the pipeline entry point.
"""

from __future__ import annotations

from core.config import (
    AnalyticsConfig,
    Language,
    Source,
    StringsConfig,
    WeaveConfig,
    WeaveRuntimeConfig,
    load_config,
    parse_config,
)
from core.errors import WeaveError
from core.platform import Platform, parse_platform
from core.types import AnalyticsStrand, HeaderStrand, LanguageStrand, Strand
from ingest.csv_download import CsvDownloader
from pipeline.runner import WeaveReport, WeaveRunner, run_weave

__all__ = [
    "AnalyticsConfig",
    "AnalyticsStrand",
    "CsvDownloader",
    "HeaderStrand",
    "Language",
    "LanguageStrand",
    "Platform",
    "Source",
    "Strand",
    "StringsConfig",
    "WeaveConfig",
    "WeaveError",
    "WeaveReport",
    "WeaveRunner",
    "WeaveRuntimeConfig",
    "load_config",
    "parse_config",
    "parse_platform",
    "run_weave",
]
