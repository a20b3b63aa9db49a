"""Analytics constant ingestion.

This module maps the type and tag columns of an analytics CSV and builds
one ``AnalyticsStrand`` per tagged data row.
"""

from __future__ import annotations

from typing import Sequence

from core.config import AnalyticsConfig, Source
from core.errors import WeaveConfigError
from core.logging_config import get_logger
from core.types import AnalyticsStrand, Strand
from ingest.csv_parsing import IngestSettings, RowBuilder, cell_at, parse_csv_source

_LOGGER = get_logger(__name__)


def parse_analytics_strands(
    config: AnalyticsConfig,
    source: Source,
    csv_text: str,
    settings: IngestSettings,
) -> list[Strand]:
    """Parse an analytics CSV into header and analytics strands.

    Raises:
        WeaveConfigError: If the tag column is missing.
        WeaveIngestError: If the key column is missing.
    """
    columns: dict[str, int] = {}

    def on_column(index: int, header: str) -> None:
        if header.lower() == config.type_column_name.lower():
            columns["type"] = index
        elif header.lower() == config.tag_column_name.lower():
            columns["tag"] = index

    def prepare_row_builder() -> RowBuilder:
        if "tag" not in columns:
            raise WeaveConfigError(
                f"Tag column with name {config.tag_column_name} not found in {source.title}."
            )
        return lambda line_number, key, row: _build_analytics_strand(
            source, columns.get("type"), columns["tag"], line_number, key, row
        )

    return parse_csv_source(source, csv_text, settings, on_column, prepare_row_builder)


def _build_analytics_strand(
    source: Source,
    type_column: int | None,
    tag_column: int,
    line_number: int,
    key: str,
    row: Sequence[str],
) -> AnalyticsStrand | None:
    tag = cell_at(row, tag_column)
    if tag is None:
        _LOGGER.warning(
            "row_missing_tag",
            source=source.title,
            line_number=line_number,
            message=f"Line {line_number} has no tag and will not be parsed",
        )
        return None
    return AnalyticsStrand(
        key=key,
        source_name=source.title,
        line_number=line_number,
        type=(cell_at(row, type_column) or "").strip(),
        tag=tag.strip(),
    )
