"""Key format validation.

This module reports string and analytics keys that cannot be used as
platform identifiers. Offending strands are reported but kept in the
output.
"""

from __future__ import annotations

import re
from typing import Iterable

from core.constants import INVALID_KEY_CHARACTER_PATTERN
from core.logging_config import get_logger
from core.types import AnalyticsStrand, LanguageStrand, Strand, describe_strand

_LOGGER = get_logger(__name__)
_INVALID_KEY_CHARACTER = re.compile(INVALID_KEY_CHARACTER_PATTERN)


def validate_keys(strands: Iterable[Strand]) -> list[Strand]:
    """Report invalid keys on language and analytics strands.

    Args:
        strands: Parsed strands.

    Returns:
        All input strands, unchanged and in order.
    """
    checked = list(strands)
    for strand in checked:
        if not isinstance(strand, (LanguageStrand, AnalyticsStrand)):
            continue
        for problem in find_key_problems(strand.key):
            _LOGGER.error(
                "invalid_key",
                key=strand.key,
                location=describe_strand(strand),
                message=f"{describe_strand(strand)} {problem}.",
            )
    return checked


def find_key_problems(key: str) -> list[str]:
    """Return human-readable problems with a key, empty when valid."""
    problems = []
    if " " in key:
        problems.append("contains a space in its key")
    if _INVALID_KEY_CHARACTER.search(key):
        problems.append("contains some illegal characters")
    return problems
