"""Weave CLI entry point.

This module loads the configuration, runs both pipelines and maps fatal
errors onto a non-zero exit code.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

from core.config import WeaveRuntimeConfig, load_config
from core.constants import CONFIG_FILE_NAME
from core.errors import WeaveError
from core.logging_config import get_logger
from ingest.csv_download import CsvDownloader
from pipeline.runner import WeaveReport, run_weave

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="weave",
        description="Generate Android, iOS and Web strings and analytics from CSV sheets",
    )
    parser.add_argument(
        "--config",
        help=f"Config file path; defaults to {CONFIG_FILE_NAME} in the current or parent directory",
    )
    parser.add_argument("--platform", help="Override the configured platform (Android, iOS, Web)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Weave CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
        if args.platform:
            config = replace(config, platform=args.platform)
        report = run_weave(config, CsvDownloader(WeaveRuntimeConfig.from_env()))
    except WeaveError as error:
        _LOGGER.error("weave_failed", error_type=type(error).__name__, message=str(error))
        return 1
    _print_report(report)
    return 0


def _print_report(report: WeaveReport) -> None:
    print(f"platform={report.platform.value}")
    print(f"strings={report.string_count}")
    print(f"analytics={report.analytics_count}")
    for path in report.written_files:
        print(f"written={path}")
    for title in report.failed_sources:
        print(f"failed_source={title}")
