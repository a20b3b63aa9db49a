"""Core constants used across Weave modules.

This module centralizes configuration defaults and output literals.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

CONFIG_FILE_NAME = "weave-config.json"
YAML_CONFIG_SUFFIXES = (".yaml", ".yml")
DEFAULT_HEADER_COLUMN_NAME = "###"
DEFAULT_KEY_COLUMN_NAME = "key"
DEFAULT_PLATFORMS_COLUMN_NAME = "platforms"
DEFAULT_TYPE_COLUMN_NAME = "type"
DEFAULT_TAG_COLUMN_NAME = "tag"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
HTTP_OK = 200
CSV_ENCODING = "utf-8-sig"
OUTPUT_ENCODING = "utf-8"
INVALID_KEY_CHARACTER_PATTERN = r"[^A-Za-z0-9_]"
ANALYTICS_BANNER = "Constant list of analytics screens and events, auto-generated by Weave"
ANDROID_ANALYTICS_SUFFIX = ".kt"
IOS_ANALYTICS_SUFFIX = ".swift"
