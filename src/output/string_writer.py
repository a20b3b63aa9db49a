"""Localized strings file rendering.

This module writes one language's strings file: a platform header, one
entry or comment per strand, and a platform footer.
"""

from __future__ import annotations

from typing import Sequence, TextIO

from core.config import Language
from core.logging_config import get_logger
from core.platform import Platform
from core.types import HeaderStrand, LanguageStrand, Strand, describe_strand
from output.text_escaping import escape_string_value

_LOGGER = get_logger(__name__)

ANDROID_STRINGS_HEADER = '<?xml version="1.0" encoding="utf-8"?> \n <resources>\n'
ANDROID_STRINGS_FOOTER = "</resources>\n"
WEB_STRINGS_HEADER = "{\n"
WEB_STRINGS_FOOTER = "}\n"


def write_strings(
    handle: TextIO,
    platform: Platform,
    language: Language,
    strands: Sequence[Strand],
) -> int:
    """Write a full strings file for one language.

    A strand that fails to render is logged and skipped. On Web the last
    entry that rendered carries no trailing comma.

    Args:
        handle: Open output handle.
        platform: Target platform.
        language: Language whose translations are written.
        strands: Verified strands in output order.

    Returns:
        Number of string entries written.
    """
    handle.write(render_strings_header(platform))
    rendered: list[tuple[Strand, str]] = []
    for strand in strands:
        try:
            text = render_strand(platform, language, strand, False)
        except Exception as error:
            _LOGGER.error(
                "strand_write_failed",
                location=describe_strand(strand),
                key=strand.key,
                error=str(error),
            )
            continue
        rendered.append((strand, text))
    last_index = _last_string_index(rendered)
    written = 0
    for index, (strand, text) in enumerate(rendered):
        if index == last_index:
            text = render_strand(platform, language, strand, True)
        handle.write(text)
        if text and isinstance(strand, LanguageStrand):
            written += 1
    handle.write(render_strings_footer(platform))
    return written


def render_strings_header(platform: Platform) -> str:
    """Return the text opening a strings file."""
    match platform:
        case Platform.ANDROID:
            return ANDROID_STRINGS_HEADER
        case Platform.WEB:
            return WEB_STRINGS_HEADER
        case _:
            return ""


def render_strings_footer(platform: Platform) -> str:
    """Return the text closing a strings file."""
    match platform:
        case Platform.ANDROID:
            return ANDROID_STRINGS_FOOTER
        case Platform.WEB:
            return WEB_STRINGS_FOOTER
        case _:
            return ""


def render_strand(
    platform: Platform,
    language: Language,
    strand: Strand,
    is_last_string: bool,
) -> str:
    """Render one strand; empty text means nothing is emitted."""
    match strand:
        case HeaderStrand(key=comment):
            return render_comment(platform, comment)
        case LanguageStrand():
            return render_string(platform, language, strand, is_last_string)
        case _:
            return ""


def render_comment(platform: Platform, comment: str) -> str:
    """Render a comment row; Web has no comment form."""
    match platform:
        case Platform.ANDROID:
            return f"\n    <!-- {comment} -->\n"
        case Platform.IOS:
            return f"\n/* {comment} */\n"
        case _:
            return ""


def render_string(
    platform: Platform,
    language: Language,
    strand: LanguageStrand,
    is_last_string: bool,
) -> str:
    """Render one translated entry.

    Blank values are skipped except on Web, where every key is emitted.
    """
    raw_value = strand.translation(language.id) or ""
    if not raw_value.strip() and platform is not Platform.WEB:
        return ""
    value = escape_string_value(raw_value, platform)
    key = strand.key
    match platform:
        case Platform.ANDROID:
            return f'    <string name="{key}">{value}</string>\n'
        case Platform.IOS:
            return f'"{key}" = "{value}";\n'
        case Platform.WEB:
            separator = "" if is_last_string else ","
            return f'    "{key}": "{value}"{separator}\n'


def _last_string_index(rendered: Sequence[tuple[Strand, str]]) -> int | None:
    for index in range(len(rendered) - 1, -1, -1):
        strand, text = rendered[index]
        if text and isinstance(strand, LanguageStrand):
            return index
    return None
