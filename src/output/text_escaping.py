"""Per-platform string value escaping.

Generated files feed platform build systems directly, so every
replacement here is order-sensitive and must stay byte-compatible.
"""

from __future__ import annotations

import re

from core.platform import Platform

HTML_OPEN = "<html>"
HTML_CLOSE = "</html>"
CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"


def escape_string_value(value: str, platform: Platform) -> str:
    """Apply shared then platform-specific transforms to a string value.

    Args:
        value: Raw translation cell.
        platform: Target platform.

    Returns:
        Value ready to be embedded in the platform's string literal.
    """
    escaped = (
        value.strip()
        .replace('"', '\\"')
        .replace("(c)", "©")
        .replace("\n", "")
    )
    match platform:
        case Platform.ANDROID:
            return _escape_android(escaped)
        case Platform.IOS:
            return _strip_html_markers(escaped.replace("%s", "%@").replace("$s", "$@"))
        case Platform.WEB:
            return _strip_html_markers(escaped)


def _escape_android(value: str) -> str:
    escaped = (
        value.replace("&", "&amp;")
        .replace("'", "\\'")
        .replace("@", "\\@")
        .replace("...", "&#8230;")
        .replace("-", "–")
    )
    if HTML_OPEN in escaped.lower():
        # Markup inside CDATA is left as is
        escaped = _replace_ignore_case(escaped, HTML_OPEN, CDATA_OPEN)
        return _replace_ignore_case(escaped, HTML_CLOSE, CDATA_CLOSE)
    return escaped.replace(">", "&gt;").replace("<", "&lt;")


def _strip_html_markers(value: str) -> str:
    stripped = _replace_ignore_case(value, HTML_OPEN, "")
    return _replace_ignore_case(stripped, HTML_CLOSE, "")


def _replace_ignore_case(value: str, old: str, new: str) -> str:
    return re.sub(re.escape(old), lambda _: new, value, flags=re.IGNORECASE)
