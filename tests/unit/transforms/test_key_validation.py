"""Unit tests for key format validation."""

from __future__ import annotations

from structlog.testing import capture_logs

from core.types import AnalyticsStrand, HeaderStrand, LanguageStrand
from transforms.key_validation import find_key_problems, validate_keys


def test_find_key_problems_flags_spaces_and_symbols() -> None:
    """Spaces and non-word characters are both reported."""
    assert find_key_problems("valid_Key_1") == []
    assert find_key_problems("has space") == [
        "contains a space in its key",
        "contains some illegal characters",
    ]
    assert find_key_problems("dash-key") == ["contains some illegal characters"]


def test_validate_keys_reports_but_keeps_invalid_strands() -> None:
    """Invalid keys are logged as errors without removing the strand."""
    strands = [
        HeaderStrand(key="Section title", source_name="Main", line_number=2),
        LanguageStrand(key="bad key", source_name="Main", line_number=3),
        AnalyticsStrand(key="ok_key", source_name="Main", line_number=4, type="", tag="t"),
    ]

    with capture_logs() as logs:
        checked = validate_keys(strands)

    assert checked == strands
    assert {entry["event"] for entry in logs} == {"invalid_key"}
    assert all(entry["log_level"] == "error" for entry in logs)
    assert logs[0]["location"] == "Line 3 from Main"
