"""Core dataclasses shared across casekit subsystems."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple


Work = Callable[[], Any]


class Outcome(str, enum.Enum):
    """Final status of a single test case."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class TestCase:
    """A named unit of verification work registered with a registry."""

    __test__ = False  # keep pytest from collecting this class

    label: str
    work: Optional[Work] = None
    index: int = 0
    tags: Tuple[str, ...] = tuple()

    @property
    def is_placeholder(self) -> bool:
        return self.work is None

    def identifier(self) -> str:
        return f"#{self.index} {self.label}"


@dataclass(frozen=True)
class FailureDetail:
    """Structured reason attached to a failed case."""

    kind: str
    message: str
    expected: Any = None
    actual: Any = None
    comparison: Optional[str] = None
    path: Optional[str] = None
    error_type: Optional[str] = None
    traceback: Optional[str] = None

    @property
    def has_values(self) -> bool:
        return self.kind == "assertion" and self.comparison is not None
