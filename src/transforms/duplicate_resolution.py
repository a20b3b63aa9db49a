"""Duplicate key resolution.

This module resolves repeated keys with last-write-wins semantics: the
earlier strand of every matching pair is dropped and a warning names both
locations. Comparison is pairwise, which is fine for sheets of hundreds
of rows.
"""

from __future__ import annotations

from typing import Callable, Hashable, Sequence

from core.logging_config import get_logger
from core.types import AnalyticsStrand, LanguageStrand, Strand, describe_strand, remove_strands

_LOGGER = get_logger(__name__)


def resolve_duplicate_strings(strands: Sequence[Strand]) -> list[Strand]:
    """Drop earlier language strands sharing a key with a later one."""
    language_strands = [strand for strand in strands if isinstance(strand, LanguageStrand)]
    duplicates = _find_overridden(
        language_strands,
        lambda strand: strand.key,
        "have the same key. The second one will be used",
    )
    return remove_strands(list(strands), duplicates)


def resolve_duplicate_analytics(strands: Sequence[Strand]) -> list[Strand]:
    """Drop earlier analytics strands sharing key and type with a later one."""
    analytics_strands = [strand for strand in strands if isinstance(strand, AnalyticsStrand)]
    duplicates = _find_overridden(
        analytics_strands,
        lambda strand: (strand.key, strand.type),
        "have the same key and type. The second one will be used",
    )
    return remove_strands(list(strands), duplicates)


def _find_overridden(
    strands: Sequence[Strand],
    match_key: Callable[[Strand], Hashable],
    reason: str,
) -> list[Strand]:
    overridden: list[Strand] = []
    for index, earlier in enumerate(strands):
        for later in strands[index + 1 :]:
            if match_key(earlier) != match_key(later):
                continue
            _LOGGER.warning(
                "duplicate_key",
                key=earlier.key,
                earlier=describe_strand(earlier),
                later=describe_strand(later),
                message=f"{describe_strand(earlier)} and {describe_strand(later)} {reason}",
            )
            overridden.append(earlier)
    return overridden
