"""Reporter base class shared by the terminal and JSON renderers."""
from __future__ import annotations

import abc
import time
from typing import Optional, Sequence

from casekit.core.models import TestCase
from casekit.core.results import RunSummary, TestResult


class Reporter(abc.ABC):
    """Receives runner lifecycle callbacks and renders them.

    The base class times the run and builds the ``RunSummary`` handed to
    ``render_complete``; subclasses only decide how things are shown.
    """

    def __init__(self) -> None:
        self._start_time: Optional[float] = None

    def on_start(self, cases: Sequence[TestCase]) -> None:
        self._start_time = time.perf_counter()
        self.render_start(cases)

    def on_complete(self, results: Sequence[TestResult]) -> RunSummary:
        summary = self.summarize(results)
        self.render_complete(results, summary)
        return summary

    def summarize(self, results: Sequence[TestResult]) -> RunSummary:
        elapsed = 0.0 if self._start_time is None else time.perf_counter() - self._start_time
        return RunSummary.from_results(results, elapsed)

    @abc.abstractmethod
    def render_start(self, cases: Sequence[TestCase]) -> None:
        """Called once before the first case runs."""

    @abc.abstractmethod
    def on_case_result(self, result: TestResult, index: int, total: int) -> None:
        """Called for each result, in registration order."""

    @abc.abstractmethod
    def render_complete(self, results: Sequence[TestResult], summary: RunSummary) -> None:
        """Called once with every result and the run summary."""
