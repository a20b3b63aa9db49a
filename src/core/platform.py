"""Target platform resolution.

This module maps configuration text onto the supported output platforms.
The resolved platform gates every formatting decision downstream.
"""

from __future__ import annotations

from enum import Enum

from core.errors import WeaveConfigError


class Platform(Enum):
    """Supported output platforms."""

    ANDROID = "Android"
    IOS = "iOS"
    WEB = "Web"


def try_parse_platform(raw_value: str) -> Platform | None:
    """Resolve a platform name case-insensitively, or return None."""
    normalized = raw_value.strip().lower()
    for platform in Platform:
        if platform.value.lower() == normalized:
            return platform
    return None


def parse_platform(raw_value: str) -> Platform:
    """Resolve the configured platform name.

    Args:
        raw_value: Free-text platform name from configuration.

    Returns:
        Matching platform.

    Raises:
        WeaveConfigError: If the name matches no supported platform.
    """
    platform = try_parse_platform(raw_value)
    if platform is None:
        raise WeaveConfigError(
            f"Unsupported platform '{raw_value}'. The platform must be Android, iOS, or Web."
        )
    return platform


def parse_platform_list(raw_value: str | None) -> list[Platform]:
    """Parse a comma-separated platform filter cell.

    Unknown names are ignored, so a cell holding only unknown names
    behaves like an empty cell.
    """
    if raw_value is None:
        return []
    platforms: list[Platform] = []
    for item in raw_value.split(","):
        platform = try_parse_platform(item)
        if platform is not None:
            platforms.append(platform)
    return platforms
