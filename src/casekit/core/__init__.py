"""Core models and helpers exposed at the package level."""
from .assertions import (
    assert_deep_equal,
    assert_equal,
    assert_false,
    assert_not_equal,
    assert_throws,
    assert_true,
)
from .comparator import ComparisonResult, compare, deep_equal
from .models import FailureDetail, Outcome, TestCase
from .registry import CaseRegistry
from .results import RunSummary, TestResult
from .runner import TestRunner

__all__ = [
    "CaseRegistry",
    "ComparisonResult",
    "FailureDetail",
    "Outcome",
    "RunSummary",
    "TestCase",
    "TestResult",
    "TestRunner",
    "assert_deep_equal",
    "assert_equal",
    "assert_false",
    "assert_not_equal",
    "assert_throws",
    "assert_true",
    "compare",
    "deep_equal",
]
