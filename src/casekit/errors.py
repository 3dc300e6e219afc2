"""Exception types raised by casekit and by assertions inside test cases."""
from __future__ import annotations

from typing import Any, Optional


class CasekitError(Exception):
    """Base class for every error raised by casekit itself."""


class RunnerError(CasekitError):
    """The harness cannot make a trustworthy claim about results.

    Raised for malformed registrations, invalid configuration and targets that
    cannot be loaded. Never recovered per case: it aborts the whole run.
    """


class AssertionFailure(AssertionError):
    """An expectation inside a test case did not hold."""

    def __init__(
        self,
        message: str,
        *,
        expected: Any = None,
        actual: Any = None,
        comparison: str = "equal",
        path: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.expected = expected
        self.actual = actual
        self.comparison = comparison
        self.path = path
