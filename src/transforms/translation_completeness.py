"""Translation completeness checks.

This module drops language strands without any translation and warns
about strands missing some of the configured languages.
"""

from __future__ import annotations

from typing import Sequence

from core.logging_config import get_logger
from core.types import LanguageStrand, Strand, remove_strands

_LOGGER = get_logger(__name__)


def check_translation_completeness(strands: Sequence[Strand], language_count: int) -> list[Strand]:
    """Remove untranslated strands and warn about incomplete ones.

    Args:
        strands: Strands surviving duplicate resolution.
        language_count: Number of configured languages.

    Returns:
        Strands with untranslated language strands removed.
    """
    untranslated: list[Strand] = []
    for strand in strands:
        if not isinstance(strand, LanguageStrand):
            continue
        if not strand.translations:
            _LOGGER.warning(
                "strand_untranslated",
                key=strand.key,
                message=(
                    f"Line {strand.line_number} from {strand.source_name} "
                    "has no translations so it will not be parsed."
                ),
            )
            untranslated.append(strand)
        elif len(strand.translations) != language_count:
            _LOGGER.warning(
                "strand_incomplete",
                key=strand.key,
                translated=len(strand.translations),
                expected=language_count,
                message=(
                    f"Line {strand.line_number} from {strand.source_name} "
                    "is missing at least one translation"
                ),
            )
    return remove_strands(list(strands), untranslated)
