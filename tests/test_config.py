from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from casekit.config import RunSettings, load_settings, settings_from_mapping
from casekit.errors import RunnerError


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "casekit.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def test_load_settings_from_file(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
        timeout: 2
        fail_fast: true
        include: ["Array.*"]
        report: json
        report_path: out/report.json
        color: false
        """,
    )
    settings = load_settings(str(path))
    assert settings.timeout == 2.0
    assert settings.fail_fast is True
    assert settings.concurrent is False
    assert settings.include == ("Array.*",)
    assert settings.report == "json"
    assert settings.report_path == "out/report.json"
    assert settings.color is False


def test_default_file_is_optional(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert load_settings() == RunSettings()
    _write(tmp_path, "concurrent: true\n")
    assert load_settings().concurrent is True


def test_schema_errors_are_collected() -> None:
    with pytest.raises(RunnerError) as exc:
        settings_from_mapping({"timeout": -1, "report": "xml", "bogus": 1})
    message = str(exc.value)
    assert "timeout" in message
    assert "report" in message
    assert "bogus" in message


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path, "- just\n- a list\n")
    with pytest.raises(RunnerError):
        load_settings(str(path))


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path, "timeout: [1\n")
    with pytest.raises(RunnerError):
        load_settings(str(path))


def test_missing_explicit_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(RunnerError):
        load_settings(str(tmp_path / "nope.yaml"))


def test_merged_ignores_none_overrides() -> None:
    base = RunSettings(timeout=1.0, fail_fast=True)
    merged = base.merged(timeout=None, fail_fast=None, concurrent=True, report="json")
    assert merged.timeout == 1.0
    assert merged.fail_fast is True
    assert merged.concurrent is True
    assert merged.report == "json"
