"""Unit tests for duplicate key resolution."""

from __future__ import annotations

from structlog.testing import capture_logs

from core.types import AnalyticsStrand, HeaderStrand, LanguageStrand
from transforms.duplicate_resolution import resolve_duplicate_analytics, resolve_duplicate_strings


def _string(key: str, line_number: int) -> LanguageStrand:
    return LanguageStrand(key=key, source_name="Main", line_number=line_number, translations={"en": key})


def _event(key: str, event_type: str, line_number: int) -> AnalyticsStrand:
    return AnalyticsStrand(
        key=key, source_name="Events", line_number=line_number, type=event_type, tag=key
    )


def test_resolve_duplicate_strings_keeps_last_occurrence() -> None:
    """Later strand wins and the warning cites both lines."""
    first = _string("greeting", 3)
    other = _string("farewell", 5)
    last = _string("greeting", 7)

    with capture_logs() as logs:
        resolved = resolve_duplicate_strings([first, other, last])

    assert resolved == [other, last]
    assert logs[0]["earlier"] == "Line 3 from Main"
    assert logs[0]["later"] == "Line 7 from Main"
    assert logs[0]["log_level"] == "warning"


def test_resolve_duplicate_strings_ignores_header_strands() -> None:
    """Header strands never take part in duplicate detection."""
    header = HeaderStrand(key="greeting", source_name="Main", line_number=2)
    strand = _string("greeting", 3)

    assert resolve_duplicate_strings([header, strand]) == [header, strand]


def test_resolve_duplicate_strings_handles_triplicates() -> None:
    """Only the final occurrence of a repeated key survives."""
    strands = [_string("k", 2), _string("k", 3), _string("k", 4)]

    assert resolve_duplicate_strings(strands) == [strands[2]]


def test_resolve_duplicate_analytics_matches_key_and_type() -> None:
    """Same key under different types is not a duplicate."""
    screen = _event("home", "Screen", 2)
    event = _event("home", "Event", 3)
    screen_again = _event("home", "Screen", 4)

    resolved = resolve_duplicate_analytics([screen, event, screen_again])

    assert resolved == [event, screen_again]
