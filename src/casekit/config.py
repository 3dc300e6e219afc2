"""YAML run settings and their validation."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import yaml
from jsonschema import Draft7Validator

from casekit.errors import RunnerError

DEFAULT_CONFIG_NAME = "casekit.yaml"

CONFIG_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "timeout": {"type": "number", "exclusiveMinimum": 0},
        "fail_fast": {"type": "boolean"},
        "concurrent": {"type": "boolean"},
        "include": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "exclude": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "report": {"type": "string", "enum": ["terminal", "json"]},
        "report_path": {"type": "string", "minLength": 1},
        "color": {"type": "boolean"},
    },
}
_validator = Draft7Validator(CONFIG_SCHEMA)


@dataclass(frozen=True)
class RunSettings:
    """Resolved settings for a run."""

    timeout: Optional[float] = None
    fail_fast: bool = False
    concurrent: bool = False
    include: Sequence[str] = tuple()
    exclude: Sequence[str] = tuple()
    report: str = "terminal"
    report_path: Optional[str] = None
    color: bool = True

    def merged(self, **overrides: Any) -> "RunSettings":
        """Return a copy with every override that is not None applied."""

        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


def load_settings(path: Optional[str] = None) -> RunSettings:
    """Load settings from ``path`` or from ``casekit.yaml`` when present."""

    if path is None:
        default = Path.cwd() / DEFAULT_CONFIG_NAME
        if not default.is_file():
            return RunSettings()
        config_path = default
    else:
        config_path = Path(path).expanduser().resolve()
        if not config_path.is_file():
            raise RunnerError(f"Config file not found: {config_path}")
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise RunnerError(f"Config file {config_path} is not valid YAML: {exc}") from exc
    return settings_from_mapping(raw)


def settings_from_mapping(raw: Any) -> RunSettings:
    if not isinstance(raw, Mapping):
        raise RunnerError("Config file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise RunnerError(f"Config schema validation failed: {messages}")
    timeout = raw.get("timeout")
    return RunSettings(
        timeout=float(timeout) if timeout is not None else None,
        fail_fast=bool(raw.get("fail_fast", False)),
        concurrent=bool(raw.get("concurrent", False)),
        include=tuple(raw.get("include", []) or []),
        exclude=tuple(raw.get("exclude", []) or []),
        report=str(raw.get("report", "terminal")),
        report_path=raw.get("report_path"),
        color=bool(raw.get("color", True)),
    )
