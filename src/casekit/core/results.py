"""Result data structures produced by the test runner."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .models import FailureDetail, Outcome, TestCase


@dataclass(frozen=True)
class TestResult:
    """Outcome of executing a single test case."""

    __test__ = False

    case: TestCase
    outcome: Outcome
    duration_s: float = 0.0
    detail: Optional[FailureDetail] = None

    @property
    def label(self) -> str:
        return self.case.label

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASSED

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAILED

    @property
    def skipped(self) -> bool:
        return self.outcome is Outcome.SKIPPED


@dataclass(frozen=True)
class RunSummary:
    """Aggregated counts for a finished run."""

    total: int
    passed: int
    failed: int
    skipped: int
    duration_s: float

    @property
    def exit_code(self) -> int:
        return 0 if self.failed == 0 else 1

    @classmethod
    def from_results(cls, results: Sequence[TestResult], duration_s: float = 0.0) -> "RunSummary":
        return cls(
            total=len(results),
            passed=sum(1 for result in results if result.passed),
            failed=sum(1 for result in results if result.failed),
            skipped=sum(1 for result in results if result.skipped),
            duration_s=duration_s,
        )
