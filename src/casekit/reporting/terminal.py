"""Terminal reporter rendering progress and summaries."""
from __future__ import annotations

from typing import Sequence

import click
from colorama import Fore, Style, just_fix_windows_console

from casekit.core.models import FailureDetail, TestCase
from casekit.core.results import RunSummary, TestResult

from .base import Reporter


STATUS_COLORS = {
    "passed": Fore.GREEN,
    "failed": Fore.RED,
    "skipped": Fore.YELLOW,
}

TRACEBACK_TAIL_LINES = 6


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(self, *, use_color: bool = True) -> None:
        super().__init__()
        self._use_color = use_color
        self._failures: list[tuple[int, TestResult]] = []
        if use_color:
            just_fix_windows_console()

    def render_start(self, cases: Sequence[TestCase]) -> None:
        self._failures.clear()
        placeholders = sum(1 for case in cases if case.is_placeholder)
        click.echo(
            self._colored(
                f"Starting run: {len(cases)} case(s), {placeholders} placeholder(s)",
                Fore.CYAN,
            )
        )

    def on_case_result(self, result: TestResult, index: int, total: int) -> None:
        status = result.outcome.value
        ms = result.duration_s * 1000
        status_text = self._colored(status.upper(), STATUS_COLORS.get(status))
        click.echo(f"[{index}/{total}] {result.label} -> {status_text} ({ms:.2f} ms)")
        if result.failed:
            self._failures.append((index, result))
            self._print_failure_details(result)

    def render_complete(self, results: Sequence[TestResult], summary: RunSummary) -> None:
        color = Fore.GREEN if summary.failed == 0 else Fore.RED
        click.echo(
            self._colored(
                f"Summary: total={summary.total} passed={summary.passed} failed={summary.failed} "
                f"skipped={summary.skipped} duration={summary.duration_s:.2f}s",
                color,
            )
        )
        if self._failures:
            click.echo(self._colored("Failure details:", Fore.RED))
            for index, result in self._failures:
                click.echo(f"  [{index}] {result.label} -> {result.outcome.value}")
                self._print_failure_details(result, indent="    ", full_traceback=True)

    def _colored(self, text: str, color: str | None) -> str:
        if not self._use_color or not color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def _print_failure_details(
        self, result: TestResult, *, indent: str = "    ", full_traceback: bool = False
    ) -> None:
        detail = result.detail
        if detail is None:
            click.echo(f"{indent}failure detail unavailable")
            return
        click.echo(f"{indent}{detail.kind}: {detail.message}")
        if detail.has_values:
            _echo_values(detail, indent)
        if detail.traceback:
            lines = detail.traceback.rstrip().splitlines()
            if not full_traceback:
                lines = lines[-TRACEBACK_TAIL_LINES:]
            for line in lines:
                click.echo(f"{indent}  {line}")


def _echo_values(detail: FailureDetail, indent: str) -> None:
    location = f" at {detail.path}" if detail.path else ""
    click.echo(f"{indent}comparison={detail.comparison}{location}")
    click.echo(f"{indent}  expected={detail.expected!r}")
    click.echo(f"{indent}  actual={detail.actual!r}")
