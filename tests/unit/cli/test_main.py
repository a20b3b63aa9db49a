"""Unit tests for CLI command handling."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import pytest
import requests

from cli.main import main
from tests.fixture_paths import fixture_path


@dataclass
class _FakeResponse:
    status_code: int
    content: bytes = b""
    reason: str = "OK"


def _write_config(directory: Path, platform: str) -> Path:
    config_path = directory / "weave-config.json"
    payload = {
        "platform": platform,
        "strings": {
            "languages": [{"id": "en", "path": str(directory / "out" / "en.strings")}],
            "sources": [
                {"title": "Main", "url": "https://example.com/strings.csv"},
                {"title": "Gone", "url": "https://example.com/gone.csv"},
            ],
        },
    }
    config_path.write_text(json.dumps(payload), encoding="utf-8")
    return config_path


def _fake_get(url: str, timeout: float) -> _FakeResponse:
    if url.endswith("strings.csv"):
        return _FakeResponse(200, fixture_path("csv/strings.csv").read_bytes())
    return _FakeResponse(404, reason="Not Found")


def test_cli_writes_outputs_and_reports_failed_sources(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """CLI should exit 0 even when one source returns 404."""
    monkeypatch.setattr(requests, "get", _fake_get)
    config_path = _write_config(tmp_path, "iOS")

    exit_code = main(["--config", str(config_path)])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "failed_source=Gone" in output
    assert '"greeting" = "Hi";' in (tmp_path / "out" / "en.strings").read_text(encoding="utf-8")


def test_cli_discovers_config_in_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Without --config the default file name is used."""
    monkeypatch.setattr(requests, "get", _fake_get)
    _write_config(tmp_path, "Web")
    monkeypatch.chdir(tmp_path)

    assert main([]) == 0
    assert json.loads((tmp_path / "out" / "en.strings").read_text(encoding="utf-8"))["greeting"] == "Hi"


def test_cli_platform_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """--platform should replace the configured platform."""
    monkeypatch.setattr(requests, "get", _fake_get)
    config_path = _write_config(tmp_path, "Web")

    assert main(["--config", str(config_path), "--platform", "android"]) == 0
    assert "<resources>" in (tmp_path / "out" / "en.strings").read_text(encoding="utf-8")


def test_cli_returns_error_code_for_bad_platform(tmp_path: Path) -> None:
    """Fatal configuration errors map to exit code 1."""
    config_path = _write_config(tmp_path, "Palm")

    assert main(["--config", str(config_path)]) == 1


def test_cli_returns_error_code_for_missing_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A missing config file is fatal."""
    empty_dir = tmp_path / "a" / "b"
    empty_dir.mkdir(parents=True)
    monkeypatch.chdir(empty_dir)

    assert main([]) == 1


def test_cli_returns_error_code_for_non_utf8_config(tmp_path: Path) -> None:
    """An undecodable config file is reported as a failure, not a traceback."""
    config_path = tmp_path / "weave-config.json"
    config_path.write_bytes(b'{"platform": "\xff"}')

    assert main(["--config", str(config_path)]) == 1
