"""Configuration model for Weave.

This module owns config file discovery, parsing and validation, plus
environment-driven runtime settings. Other modules consume typed config
objects instead of raw mappings or env reads.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence, cast

from core.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_HEADER_COLUMN_NAME,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_KEY_COLUMN_NAME,
    DEFAULT_PLATFORMS_COLUMN_NAME,
    DEFAULT_TAG_COLUMN_NAME,
    DEFAULT_TYPE_COLUMN_NAME,
    YAML_CONFIG_SUFFIXES,
)
from core.errors import WeaveConfigError, WeaveDependencyError


@dataclass(frozen=True)
class Source:
    """One CSV origin.

    Attributes:
        title: Display name used in diagnostics.
        url: ``http(s)://`` or ``s3://`` location of the CSV.
    """

    title: str
    url: str


@dataclass(frozen=True)
class Language:
    """One output language.

    Attributes:
        id: Language id matched against CSV header cells.
        path: Output file path for this language.
    """

    id: str
    path: str


@dataclass(frozen=True)
class StringsConfig:
    """Localized strings pipeline configuration."""

    languages: tuple[Language, ...]
    sources: tuple[Source, ...]


@dataclass(frozen=True)
class AnalyticsConfig:
    """Analytics constants pipeline configuration.

    Attributes:
        package_name: Kotlin package, required on Android.
        type_column_name: Header of the optional type column.
        tag_column_name: Header of the required tag column.
        types: Type names, in output order.
        sources: CSV sources.
        path: Output file path.
    """

    package_name: str | None
    type_column_name: str
    tag_column_name: str
    types: tuple[str, ...]
    sources: tuple[Source, ...]
    path: str


@dataclass(frozen=True)
class WeaveConfig:
    """Validated root configuration.

    Attributes:
        platform: Raw platform name, resolved by the orchestrator.
        header_column_name: Marker prefixing comment-row keys.
        key_column_name: Header of the key column.
        platforms_column_name: Header of the optional platform filter column.
        strings: Strings pipeline config, if any.
        analytics: Analytics pipeline config, if any.
    """

    platform: str
    header_column_name: str = DEFAULT_HEADER_COLUMN_NAME
    key_column_name: str = DEFAULT_KEY_COLUMN_NAME
    platforms_column_name: str = DEFAULT_PLATFORMS_COLUMN_NAME
    strings: StringsConfig | None = None
    analytics: AnalyticsConfig | None = None


@dataclass(frozen=True)
class WeaveRuntimeConfig:
    """Environment-driven runtime settings.

    Attributes:
        http_timeout: Timeout in seconds for each CSV download.
        s3_region: Optional AWS region for ``s3://`` sources.
        s3_profile: Optional AWS profile for ``s3://`` sources.
    """

    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    s3_region: str | None = None
    s3_profile: str | None = None

    @classmethod
    def from_env(cls) -> "WeaveRuntimeConfig":
        """Build runtime settings from process environment variables.

        Raises:
            WeaveConfigError: If environment values are invalid.
        """
        timeout_value = os.getenv("WEAVE_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT_SECONDS))
        return cls(
            http_timeout=_parse_http_timeout(timeout_value),
            s3_region=os.getenv("WEAVE_S3_REGION"),
            s3_profile=os.getenv("WEAVE_S3_PROFILE"),
        )


def find_config_file(start_dir: Path | None = None) -> Path:
    """Locate the default config file in a directory or its parent.

    Args:
        start_dir: Directory searched first, defaults to the working directory.

    Returns:
        Path of the discovered config file.

    Raises:
        WeaveConfigError: If neither directory holds the config file.
    """
    base_dir = (start_dir or Path.cwd()).resolve()
    for directory in (base_dir, base_dir.parent):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    raise WeaveConfigError(
        f"Config file {CONFIG_FILE_NAME} not found in {base_dir} or its parent directory. "
        "Create one or pass --config."
    )


def load_config(config_path: str | None = None) -> WeaveConfig:
    """Load and validate the Weave configuration.

    Args:
        config_path: Optional explicit config path. When omitted the default
            file is discovered with ``find_config_file``.

    Returns:
        Validated configuration.

    Raises:
        WeaveConfigError: If the file is missing, unreadable or invalid.
    """
    if config_path is None:
        config_file = find_config_file()
    else:
        config_file = Path(config_path).expanduser().resolve()
        if not config_file.is_file():
            raise WeaveConfigError(
                f"Config file does not exist at {config_file}. Provide a valid config path."
            )
    payload = _load_payload(config_file)
    return parse_config(payload)


def parse_config(payload: object) -> WeaveConfig:
    """Validate a raw config payload into typed configuration.

    Unknown keys are ignored.

    Raises:
        WeaveConfigError: If required fields are missing or mistyped.
    """
    root = _expect_mapping(payload, "config root")
    platform = _required_string(root, "platform", "config root")
    strings_payload = root.get("strings")
    analytics_payload = root.get("analytics")
    return WeaveConfig(
        platform=platform,
        header_column_name=_string_or_default(
            root, "headerColumnName", DEFAULT_HEADER_COLUMN_NAME
        ),
        key_column_name=_string_or_default(root, "keyColumnName", DEFAULT_KEY_COLUMN_NAME),
        platforms_column_name=_string_or_default(
            root, "platformsColumnName", DEFAULT_PLATFORMS_COLUMN_NAME
        ),
        strings=None if strings_payload is None else _parse_strings(strings_payload),
        analytics=None if analytics_payload is None else _parse_analytics(analytics_payload),
    )


def _load_payload(config_file: Path) -> object:
    try:
        text = config_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise WeaveConfigError(
            f"Failed to read config at {config_file}: {error}. Check file permissions and retry."
        ) from error
    if config_file.suffix.lower() in YAML_CONFIG_SUFFIXES:
        return _parse_yaml(config_file, text)
    try:
        return cast(object, json.loads(text))
    except json.JSONDecodeError as error:
        raise WeaveConfigError(
            f"Failed to parse JSON config at {config_file}:{error.lineno}: {error.msg}. "
            "Fix the JSON syntax and retry."
        ) from error


def _parse_yaml(config_file: Path, text: str) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise WeaveDependencyError(
            "YAML config support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    try:
        payload = cast(object, yaml.safe_load(text))
    except yaml.YAMLError as error:
        raise WeaveConfigError(
            f"Failed to parse YAML config at {config_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise WeaveConfigError(f"Config at {config_file} is empty. Define at least 'platform'.")
    return payload


def _parse_strings(payload: object) -> StringsConfig:
    mapping = _expect_mapping(payload, "strings config")
    languages = []
    for index, raw_language in enumerate(_sequence_or_empty(mapping, "languages", "strings")):
        context = f"strings.languages[{index}]"
        language_mapping = _expect_mapping(raw_language, context)
        languages.append(
            Language(
                id=_required_string(language_mapping, "id", context),
                path=_required_string(language_mapping, "path", context),
            )
        )
    return StringsConfig(
        languages=tuple(languages),
        sources=_parse_sources(mapping, "strings"),
    )


def _parse_analytics(payload: object) -> AnalyticsConfig:
    mapping = _expect_mapping(payload, "analytics config")
    package_name = mapping.get("packageName")
    if package_name is not None and not isinstance(package_name, str):
        raise WeaveConfigError("Config field 'analytics.packageName' must be a string.")
    types = []
    for index, raw_type in enumerate(_sequence_or_empty(mapping, "types", "analytics")):
        if not isinstance(raw_type, str):
            raise WeaveConfigError(f"Config field 'analytics.types[{index}]' must be a string.")
        types.append(raw_type)
    return AnalyticsConfig(
        package_name=package_name,
        type_column_name=_string_or_default(mapping, "typeColumnName", DEFAULT_TYPE_COLUMN_NAME),
        tag_column_name=_string_or_default(mapping, "tagColumnName", DEFAULT_TAG_COLUMN_NAME),
        types=tuple(types),
        sources=_parse_sources(mapping, "analytics"),
        path=_required_string(mapping, "path", "analytics"),
    )


def _parse_sources(mapping: Mapping[str, object], section: str) -> tuple[Source, ...]:
    sources = []
    for index, raw_source in enumerate(_sequence_or_empty(mapping, "sources", section)):
        context = f"{section}.sources[{index}]"
        source_mapping = _expect_mapping(raw_source, context)
        sources.append(
            Source(
                title=_required_string(source_mapping, "title", context),
                url=_required_string(source_mapping, "url", context),
            )
        )
    return tuple(sources)


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise WeaveConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise WeaveConfigError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _sequence_or_empty(
    mapping: Mapping[str, object], key: str, context: str
) -> Sequence[object]:
    value = mapping.get(key)
    if value is None:
        return ()
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise WeaveConfigError(
        f"Invalid {context}.{key}: expected list, got {type(value).__name__}."
    )


def _required_string(mapping: Mapping[str, object], key: str, context: str) -> str:
    value = mapping.get(key)
    if not isinstance(value, str) or not value.strip():
        raise WeaveConfigError(
            f"Config field '{key}' in {context} must be a non-empty string."
        )
    return value


def _string_or_default(mapping: Mapping[str, object], key: str, default: str) -> str:
    value = mapping.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise WeaveConfigError(f"Config field '{key}' must be a string.")
    return value


def _parse_http_timeout(raw_value: str) -> float:
    """Parse the HTTP timeout environment value.

    Raises:
        WeaveConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise WeaveConfigError(
            "Invalid WEAVE_HTTP_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set WEAVE_HTTP_TIMEOUT to a positive number."
        ) from error
    if timeout <= 0:
        raise WeaveConfigError(
            f"Invalid WEAVE_HTTP_TIMEOUT value '{raw_value}': must be positive."
        )
    return timeout
