"""Scoped output file handling."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO

from core.constants import OUTPUT_ENCODING
from core.errors import WeaveOutputError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


@contextmanager
def open_output(path: str, title: str) -> Iterator[TextIO]:
    """Open a UTF-8 output file, flushing and closing it on every exit path.

    Args:
        path: Output file path; missing parent directories are created.
        title: Display name of the content, used in logs.

    Yields:
        Writable text handle using ``\\n`` line endings.

    Raises:
        WeaveOutputError: If the file cannot be opened or written.
    """
    output_path = Path(path).expanduser()
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        handle = output_path.open("w", encoding=OUTPUT_ENCODING, newline="\n")
    except OSError as error:
        raise WeaveOutputError(
            f"Failed to open {title} output at {output_path}: {error}. "
            "Check the configured path and permissions."
        ) from error
    try:
        with handle:
            yield handle
    except OSError as error:
        raise WeaveOutputError(
            f"Failed to write {title} output at {output_path}: {error}."
        ) from error
    _LOGGER.info("output_written", title=title, path=str(output_path))
