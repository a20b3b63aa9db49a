"""CSV source downloads.

This module fetches the raw CSV text behind a configured source, over
HTTP for ``http(s)://`` URLs or from S3 for ``s3://`` URLs. Download
failures are logged and reported as ``None`` so sibling sources still
process.
"""

from __future__ import annotations

from typing import Any

import requests

from core.config import Source, WeaveRuntimeConfig
from core.constants import CSV_ENCODING, HTTP_OK
from core.errors import WeaveConfigError, WeaveDependencyError
from core.logging_config import get_logger
from core.s3_uri import S3Location, is_s3_uri, parse_s3_uri

_LOGGER = get_logger(__name__)


class CsvDownloader:
    """Fetch CSV text for sources using runtime network settings."""

    def __init__(self, runtime_config: WeaveRuntimeConfig | None = None) -> None:
        self._runtime_config = runtime_config or WeaveRuntimeConfig.from_env()

    def __call__(self, source: Source) -> str | None:
        """Download one source.

        Args:
            source: Configured CSV source.

        Returns:
            Decoded CSV text, or None when the download failed.
        """
        _LOGGER.info("source_connecting", source=source.title, url=source.url)
        if is_s3_uri(source.url):
            return self._download_s3(source)
        return self._download_http(source)

    def _download_http(self, source: Source) -> str | None:
        try:
            response = requests.get(source.url, timeout=self._runtime_config.http_timeout)
        except requests.RequestException as error:
            _LOGGER.warning(
                "source_connection_failed",
                source=source.title,
                url=source.url,
                message=str(error),
            )
            return None
        _LOGGER.info("source_response", source=source.title, status_code=response.status_code)
        if response.status_code != HTTP_OK:
            _LOGGER.warning(
                "source_response_rejected",
                source=source.title,
                status_code=response.status_code,
                reason=response.reason,
            )
            return None
        return _decode_body(source, response.content)

    def _download_s3(self, source: Source) -> str | None:
        try:
            location = parse_s3_uri(source.url)
        except WeaveConfigError as error:
            _LOGGER.warning(
                "source_url_invalid",
                source=source.title,
                url=source.url,
                message=str(error),
            )
            return None
        s3_client = self._create_s3_client()
        from botocore.exceptions import BotoCoreError, ClientError

        try:
            body = _read_s3_object(s3_client, location)
        except (BotoCoreError, ClientError) as error:
            _LOGGER.warning(
                "source_connection_failed",
                source=source.title,
                url=source.url,
                message=str(error),
            )
            return None
        return _decode_body(source, body)

    def _create_s3_client(self) -> Any:
        """Create a boto3 S3 client.

        Raises:
            WeaveDependencyError: If boto3 is missing.
        """
        try:
            import boto3
        except ImportError as error:
            raise WeaveDependencyError(
                "S3 sources require boto3, but it is not installed. "
                "Install boto3 to read s3:// sources."
            ) from error
        session_kwargs: dict[str, str] = {}
        if self._runtime_config.s3_profile:
            session_kwargs["profile_name"] = self._runtime_config.s3_profile
        if self._runtime_config.s3_region:
            session_kwargs["region_name"] = self._runtime_config.s3_region
        session = boto3.session.Session(**session_kwargs)
        return session.client("s3")


def _read_s3_object(s3_client: Any, location: S3Location) -> bytes:
    return s3_client.get_object(Bucket=location.bucket, Key=location.key)["Body"].read()


def _decode_body(source: Source, body: bytes) -> str | None:
    try:
        return body.decode(CSV_ENCODING)
    except UnicodeDecodeError as error:
        _LOGGER.warning(
            "source_decode_failed",
            source=source.title,
            message=f"Body is not valid UTF-8: {error.reason}",
        )
        return None
