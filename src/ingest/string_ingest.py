"""Localized string ingestion.

This module maps language columns in a strings CSV and builds one
``LanguageStrand`` per data row. Column positions stay local to each
source scan.
"""

from __future__ import annotations

from typing import Sequence

from core.config import Source, StringsConfig
from core.errors import WeaveConfigError
from core.types import LanguageStrand, Strand
from ingest.csv_parsing import IngestSettings, RowBuilder, cell_at, parse_csv_source


def parse_string_strands(
    config: StringsConfig,
    source: Source,
    csv_text: str,
    settings: IngestSettings,
) -> list[Strand]:
    """Parse a strings CSV into header and language strands.

    Args:
        config: Strings pipeline configuration.
        source: Source the CSV came from.
        csv_text: Raw CSV document.
        settings: Shared ingest settings.

    Returns:
        Parsed strands in source order.

    Raises:
        WeaveConfigError: If a configured language has no column.
        WeaveIngestError: If the key column is missing.
    """
    language_columns: dict[str, int] = {}

    def on_column(index: int, header: str) -> None:
        for language in config.languages:
            if header.strip().lower() == language.id.lower():
                language_columns[language.id] = index
                break

    def prepare_row_builder() -> RowBuilder:
        for language in config.languages:
            if language.id not in language_columns:
                raise WeaveConfigError(
                    f"{language.id} in {source.title} does not have any translations. "
                    f"Add a '{language.id}' column or remove the language from the config."
                )
        return lambda line_number, key, row: _build_language_strand(
            source, language_columns, line_number, key, row
        )

    return parse_csv_source(source, csv_text, settings, on_column, prepare_row_builder)


def _build_language_strand(
    source: Source,
    language_columns: dict[str, int],
    line_number: int,
    key: str,
    row: Sequence[str],
) -> LanguageStrand:
    translations: dict[str, str] = {}
    for language_id, column in language_columns.items():
        value = cell_at(row, column)
        if value is not None:
            translations[language_id] = value
    return LanguageStrand(
        key=key,
        source_name=source.title,
        line_number=line_number,
        translations=translations,
    )
