"""Header-driven CSV parsing into strands.

This module scans the CSV header row for the key and platform filter
columns and streams data rows into strands. Row-kind specific parsing is
delegated to the caller through callbacks, so the same loop serves the
strings and analytics pipelines.
"""

from __future__ import annotations

import csv
import io
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence

from core.config import Source
from core.errors import WeaveIngestError
from core.logging_config import get_logger
from core.platform import Platform, parse_platform_list
from core.types import HeaderStrand, Strand

_LOGGER = get_logger(__name__)

ColumnCallback = Callable[[int, str], None]
RowBuilder = Callable[[int, str, Sequence[str]], Optional[Strand]]

FIRST_DATA_LINE = 2


@dataclass(frozen=True)
class HeaderColumns:
    """Column positions discovered in the header row.

    Attributes:
        key_column: Zero-based index of the key column.
        platform_column: Zero-based index of the platform filter column,
            None when the CSV has no such column.
    """

    key_column: int
    platform_column: int | None


@dataclass(frozen=True)
class IngestSettings:
    """Column names, header marker and active platform for one run.

    Attributes:
        key_column_name: Header of the key column.
        platforms_column_name: Header of the optional platform filter column.
        header_marker: Prefix marking comment-row keys.
        platform: Active output platform.
    """

    key_column_name: str
    platforms_column_name: str
    header_marker: str
    platform: Platform


@dataclass(frozen=True)
class RowContext:
    """Per-source state shared by every data row."""

    source: Source
    columns: HeaderColumns
    settings: IngestSettings


@contextmanager
def open_csv_rows(csv_text: str) -> Iterator[Iterator[list[str]]]:
    """Open a row iterator over CSV text, closing it on every exit path."""
    stream = io.StringIO(csv_text, newline="")
    try:
        yield csv.reader(stream)
    finally:
        stream.close()


def scan_headers(
    source: Source,
    headers: Sequence[str | None],
    key_column_name: str,
    platforms_column_name: str,
    on_column: ColumnCallback,
) -> HeaderColumns:
    """Locate the key and platform columns of a header row.

    Args:
        source: Source being parsed, used in diagnostics.
        headers: Header row cells.
        key_column_name: Expected key column header.
        platforms_column_name: Expected platform filter column header.
        on_column: Called with ``(index, header)`` for each non-null cell.

    Returns:
        Discovered column positions.

    Raises:
        WeaveIngestError: If no header matches the key column name.
    """
    key_column: int | None = None
    platform_column: int | None = None
    for index, header in enumerate(headers):
        if header is None:
            continue
        if header.lower() == key_column_name.lower():
            key_column = index
        elif header.lower() == platforms_column_name.lower():
            platform_column = index
        on_column(index, header)
    if key_column is None:
        raise WeaveIngestError(
            f"Source '{source.title}' has no column marked '{key_column_name}'. "
            "Add a key column holding the string keys."
        )
    return HeaderColumns(key_column=key_column, platform_column=platform_column)


def parse_rows(
    context: RowContext,
    rows: Iterator[Sequence[str]],
    build_row: RowBuilder,
) -> list[Strand]:
    """Stream data rows into strands.

    Args:
        context: Source, columns, header marker and active platform.
        rows: Data rows following the header row.
        build_row: Builds a strand from ``(line_number, key, row)``;
            returning None skips the row.

    Returns:
        Parsed strands in source order.
    """
    strands: list[Strand] = []
    for line_number, row in enumerate(rows, FIRST_DATA_LINE):
        strand = _parse_row(context, line_number, row, build_row)
        if strand is not None:
            strands.append(strand)
    return strands


def parse_csv_source(
    source: Source,
    csv_text: str,
    settings: IngestSettings,
    on_column: ColumnCallback,
    prepare_row_builder: Callable[[], RowBuilder],
) -> list[Strand]:
    """Parse a whole CSV document, header row first.

    Args:
        source: Source the text was downloaded from.
        csv_text: Raw CSV document.
        settings: Column names, header marker and active platform.
        on_column: Called for every header cell so callers can map columns.
        prepare_row_builder: Runs once the header scan is complete; checks
            the columns collected through ``on_column`` and returns the
            row builder.

    Returns:
        Parsed strands in source order.

    Raises:
        WeaveIngestError: If the key column is missing.
    """
    with open_csv_rows(csv_text) as rows:
        headers = next(rows, [])
        columns = scan_headers(
            source,
            headers,
            settings.key_column_name,
            settings.platforms_column_name,
            on_column,
        )
        build_row = prepare_row_builder()
        context = RowContext(source=source, columns=columns, settings=settings)
        strands = parse_rows(context, rows, build_row)
    _LOGGER.info("source_parsed", source=source.title, strand_count=len(strands))
    return strands


def cell_at(row: Sequence[str], index: int | None) -> str | None:
    """Return a row cell, or None when the column is absent or the cell is empty."""
    if index is None or index >= len(row):
        return None
    return row[index] or None


def _parse_row(
    context: RowContext,
    line_number: int,
    row: Sequence[str],
    build_row: RowBuilder,
) -> Strand | None:
    key = (cell_at(row, context.columns.key_column) or "").strip()
    if not key:
        _LOGGER.warning(
            "row_missing_key",
            source=context.source.title,
            line_number=line_number,
            message=f"Line {line_number} does not have a key and will not be parsed",
        )
        return None
    if key.startswith(context.settings.header_marker):
        return HeaderStrand(
            key=key.replace(context.settings.header_marker, "").strip(),
            source_name=context.source.title,
            line_number=line_number,
        )
    if context.columns.platform_column is not None:
        platforms = parse_platform_list(cell_at(row, context.columns.platform_column))
        if platforms and context.settings.platform not in platforms:
            return None
    return build_row(line_number, key, row)
