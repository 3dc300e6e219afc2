"""Deliberately failing cases showing how failures are reported.

Run with:  casekit run examples/language_features/failing_cases.py
"""
from __future__ import annotations

from casekit.core import CaseRegistry, assert_deep_equal, assert_equal


def register_cases(registry: CaseRegistry) -> None:
    registry.register("sum", lambda: assert_equal(4 + 6, 10))
    registry.register("mismatch", lambda: assert_equal(1, 2))
    registry.register(
        "nested mismatch",
        lambda: assert_deep_equal({"a": [1, 2], "b": {"c": 3}}, {"a": [1, 2], "b": {"c": 4}}),
    )
    registry.register("unhandled error", lambda: {}["missing"])
    registry.placeholder("placeholder")
