"""JSON reporter emitting structured execution results."""
from __future__ import annotations

import datetime as dt
import json
import pathlib
from typing import Any, Dict, Optional, Sequence

import click
from jsonschema import validate

from casekit.core.models import TestCase
from casekit.core.results import RunSummary, TestResult

from .base import Reporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION


class JsonReporter(Reporter):
    """Writes results as JSON validated against the schema.

    Without a path the payload is echoed to stdout instead of written.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        super().__init__()
        self._path = pathlib.Path(path) if path else None
        self._records: list[Dict[str, Any]] = []

    def render_start(self, cases: Sequence[TestCase]) -> None:
        self._records.clear()

    def on_case_result(self, result: TestResult, index: int, total: int) -> None:
        self._records.append(_result_to_dict(result))

    def render_complete(self, results: Sequence[TestResult], summary: RunSummary) -> None:
        payload = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": dt.datetime.now(dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "summary": {
                "total": summary.total,
                "passed": summary.passed,
                "failed": summary.failed,
                "skipped": summary.skipped,
                "duration_s": summary.duration_s,
            },
            "cases": self._records,
        }
        validate(instance=payload, schema=JSON_SCHEMA_V1)
        text = json.dumps(payload, indent=2)
        if self._path is None:
            click.echo(text)
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(text, encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}")


def _result_to_dict(result: TestResult) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "index": result.case.index,
        "label": result.label,
        "status": result.outcome.value,
        "duration_ms": result.duration_s * 1000,
        "tags": list(result.case.tags),
    }
    detail = result.detail
    if detail is not None:
        failure: Dict[str, Any] = {
            "kind": detail.kind,
            "message": detail.message,
            "comparison": detail.comparison,
            "path": detail.path,
            "error_type": detail.error_type,
            "traceback": detail.traceback,
        }
        if detail.has_values:
            # repr keeps arbitrary values JSON safe
            failure["expected"] = repr(detail.expected)
            failure["actual"] = repr(detail.actual)
        record["failure"] = failure
    return record
