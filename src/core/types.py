"""Shared typed models.

This module defines the immutable strand records produced by ingestion,
filtered by validation, and consumed once by the platform writers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union


@dataclass(frozen=True, eq=False)
class HeaderStrand:
    """Comment row rendered as a platform comment.

    Attributes:
        key: Display text with the header marker removed.
        source_name: Title of the originating source.
        line_number: One-based CSV line, header row being line 1.
    """

    key: str
    source_name: str
    line_number: int


@dataclass(frozen=True, eq=False)
class LanguageStrand:
    """Localized string entry.

    Attributes:
        key: String identifier.
        source_name: Title of the originating source.
        line_number: One-based CSV line.
        translations: Raw cell values keyed by language id.
    """

    key: str
    source_name: str
    line_number: int
    translations: Mapping[str, str] = field(default_factory=dict)

    def translation(self, language_id: str) -> str | None:
        """Return the raw translation for a language, if recorded."""
        return self.translations.get(language_id)


@dataclass(frozen=True, eq=False)
class AnalyticsStrand:
    """Analytics event or screen constant.

    Attributes:
        key: Constant identifier.
        source_name: Title of the originating source.
        line_number: One-based CSV line.
        type: Grouping type, empty when ungrouped.
        tag: Emitted tag value.
    """

    key: str
    source_name: str
    line_number: int
    type: str
    tag: str


Strand = Union[HeaderStrand, LanguageStrand, AnalyticsStrand]


def describe_strand(strand: Strand) -> str:
    """Return the diagnostic location of a strand."""
    return f"Line {strand.line_number} from {strand.source_name}"


def remove_strands(strands: list[Strand], to_remove: list[Strand]) -> list[Strand]:
    """Drop strands by identity, preserving the order of survivors."""
    removed_ids = {id(strand) for strand in to_remove}
    return [strand for strand in strands if id(strand) not in removed_ids]
