"""Analytics constants file rendering.

This module writes analytics strands as Kotlin constants (Android),
Swift constants (iOS) or a JSON object (Web). Untyped strands come first,
then one block per configured type that has at least one strand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TextIO

from core.config import AnalyticsConfig
from core.constants import ANALYTICS_BANNER, ANDROID_ANALYTICS_SUFFIX, IOS_ANALYTICS_SUFFIX
from core.logging_config import get_logger
from core.platform import Platform
from core.types import AnalyticsStrand, Strand, describe_strand

_LOGGER = get_logger(__name__)

INDENT = "    "


@dataclass(frozen=True)
class AnalyticsGroup:
    """Analytics strands sharing one configured type."""

    type_name: str
    strands: tuple[AnalyticsStrand, ...]


@dataclass(frozen=True)
class AnalyticsLayout:
    """Analytics strands arranged in output order."""

    untyped: tuple[AnalyticsStrand, ...]
    groups: tuple[AnalyticsGroup, ...]


def write_analytics(
    handle: TextIO,
    platform: Platform,
    config: AnalyticsConfig,
    strands: Sequence[Strand],
) -> int:
    """Write the analytics constants file.

    Args:
        handle: Open output handle.
        platform: Target platform.
        config: Analytics configuration (types, package, path).
        strands: Verified strands; header strands are ignored.

    Returns:
        Number of constants written.
    """
    layout = arrange_analytics(strands, config.types)
    handle.write(render_analytics_header(platform, object_name(platform, config.path), config))
    written = 0
    for index, strand in enumerate(layout.untyped):
        is_last = index == len(layout.untyped) - 1 and not layout.groups
        written += _write_entry(handle, platform, strand, False, is_last)
    for group_index, group in enumerate(layout.groups):
        handle.write(render_type_header(platform, group.type_name))
        for index, strand in enumerate(group.strands):
            is_last = index == len(group.strands) - 1
            written += _write_entry(handle, platform, strand, True, is_last)
        handle.write(render_type_footer(platform, group_index == len(layout.groups) - 1))
    handle.write("}\n")
    return written


def arrange_analytics(strands: Sequence[Strand], types: Sequence[str]) -> AnalyticsLayout:
    """Split analytics strands into untyped entries and per-type groups.

    Types are matched case-insensitively in configured order; types
    without strands produce no group.
    """
    remaining = [strand for strand in strands if isinstance(strand, AnalyticsStrand)]
    untyped = tuple(strand for strand in remaining if not strand.type.strip())
    remaining = [strand for strand in remaining if strand.type.strip()]
    groups: list[AnalyticsGroup] = []
    for type_name in types:
        matching = tuple(strand for strand in remaining if strand.type.lower() == type_name.lower())
        if not matching:
            continue
        remaining = [strand for strand in remaining if strand not in matching]
        groups.append(AnalyticsGroup(type_name=type_name, strands=matching))
    for strand in remaining:
        _LOGGER.warning(
            "analytics_type_unconfigured",
            location=describe_strand(strand),
            type=strand.type,
            message=f"{describe_strand(strand)} has type {strand.type} which is not configured",
        )
    return AnalyticsLayout(untyped=untyped, groups=tuple(groups))


def object_name(platform: Platform, path: str) -> str:
    """Derive the constants holder name from the output file name."""
    file_name = path.split("/")[-1]
    match platform:
        case Platform.ANDROID:
            return file_name.removesuffix(ANDROID_ANALYTICS_SUFFIX)
        case Platform.IOS:
            return file_name.removesuffix(IOS_ANALYTICS_SUFFIX)
        case _:
            return ""


def render_analytics_header(platform: Platform, name: str, config: AnalyticsConfig) -> str:
    """Return the text opening the analytics file."""
    match platform:
        case Platform.ANDROID:
            return (
                f"package {config.package_name}\n"
                "\n"
                "/**\n"
                f" * {ANALYTICS_BANNER}\n"
                " */\n"
                f"object {name} {{\n"
                "\n"
            )
        case Platform.IOS:
            return f"//  {ANALYTICS_BANNER}\n\nclass {name} {{\n"
        case Platform.WEB:
            return "{\n"


def render_type_header(platform: Platform, type_name: str) -> str:
    """Return the text opening one type block."""
    match platform:
        case Platform.ANDROID:
            return f"{INDENT}object {type_name} {{\n"
        case Platform.IOS:
            return f"{INDENT}enum {type_name} {{\n"
        case Platform.WEB:
            return f'{INDENT}"{type_name.lower()}" : {{ \n'


def render_type_footer(platform: Platform, is_last_type: bool) -> str:
    """Return the text closing one type block.

    Mobile blocks are separated by a blank line, Web blocks by a comma.
    """
    if is_last_type:
        return f"{INDENT}}}\n"
    if platform is Platform.WEB:
        return f"{INDENT}}},\n"
    return f"{INDENT}}}\n\n"


def render_analytics_entry(
    platform: Platform,
    strand: AnalyticsStrand,
    has_type: bool,
    is_last: bool,
) -> str:
    """Render one analytics constant.

    Keys are upper-cased on Android and iOS.
    """
    indent = INDENT * 2 if has_type else INDENT
    match platform:
        case Platform.ANDROID:
            return f'{indent}const val {strand.key.upper()} = "{strand.tag}"\n'
        case Platform.IOS:
            return f'{indent}static let {strand.key.upper()} = "{strand.tag}"\n'
        case Platform.WEB:
            separator = "" if is_last else ","
            return f'{indent}"{strand.key}": "{strand.tag}"{separator}\n'


def _write_entry(
    handle: TextIO,
    platform: Platform,
    strand: AnalyticsStrand,
    has_type: bool,
    is_last: bool,
) -> int:
    try:
        text = render_analytics_entry(platform, strand, has_type, is_last)
    except Exception as error:
        _LOGGER.error(
            "strand_write_failed",
            location=describe_strand(strand),
            key=strand.key,
            error=str(error),
        )
        return 0
    handle.write(text)
    return 1
