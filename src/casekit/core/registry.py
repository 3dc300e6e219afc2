"""Ordered registry of test cases."""
from __future__ import annotations

import fnmatch
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from casekit.errors import RunnerError

from .models import TestCase, Work


class CaseRegistry:
    """Stores test cases in registration order.

    Registries are plain objects owned by whoever builds them; there is no
    process-wide default. Duplicate labels are kept as separate entries.
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._cases: List[TestCase] = []

    def register(
        self,
        label: str,
        work: Optional[Work] = None,
        *,
        tags: Sequence[str] = (),
    ) -> TestCase:
        if not isinstance(label, str) or not label.strip():
            raise RunnerError(f"Test label must be a non-empty string, got {label!r}")
        if work is not None and not callable(work):
            raise RunnerError(
                f"Work for test '{label}' must be callable or omitted, got {type(work).__name__}"
            )
        case = TestCase(label=label, work=work, index=len(self._cases), tags=tuple(tags))
        self._cases.append(case)
        return case

    def case(self, label: str, *, tags: Sequence[str] = ()) -> Callable[[Work], Work]:
        """Decorator registering the decorated function as the case's work."""

        def decorator(func: Work) -> Work:
            self.register(label, func, tags=tags)
            return func

        return decorator

    def placeholder(self, label: str, *, tags: Sequence[str] = ()) -> TestCase:
        return self.register(label, None, tags=tags)

    def extend(self, cases: Iterable[TestCase]) -> None:
        for case in cases:
            self.register(case.label, case.work, tags=case.tags)

    def select(self, include: Sequence[str] = (), exclude: Sequence[str] = ()) -> "CaseRegistry":
        """Return a new registry holding the cases whose labels match the globs."""

        selected = CaseRegistry(self.name)
        for case in self._cases:
            if include and not any(fnmatch.fnmatchcase(case.label, pattern) for pattern in include):
                continue
            if exclude and any(fnmatch.fnmatchcase(case.label, pattern) for pattern in exclude):
                continue
            selected.register(case.label, case.work, tags=case.tags)
        return selected

    def cases(self) -> Tuple[TestCase, ...]:
        return tuple(self._cases)

    def labels(self) -> Tuple[str, ...]:
        return tuple(case.label for case in self._cases)

    def clear(self) -> None:
        self._cases.clear()

    def __iter__(self) -> Iterator[TestCase]:
        return iter(tuple(self._cases))

    def __len__(self) -> int:
        return len(self._cases)

    def __repr__(self) -> str:
        return f"CaseRegistry(name={self.name!r}, cases={len(self._cases)})"
