"""Structural comparison of arbitrary values.

Values are classified into a small set of kinds (primitive, sequence, mapping,
set, array, object) and each pair of values is compared by the routine for its
kind. Values of different kinds are never equal. The first difference found is
reported together with a path such as ``$[1]['b']``.
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import numpy as np


class ValueKind(str, enum.Enum):
    PRIMITIVE = "primitive"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SET = "set"
    ARRAY = "array"
    OBJECT = "object"


PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes)


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing two values."""

    equal: bool
    path: str = "$"
    actual: Any = None
    expected: Any = None
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.equal


def _unwrap(value: Any) -> Any:
    # numpy scalars compare as the matching Python primitive
    if isinstance(value, np.generic):
        return value.item()
    return value


def kind_of(value: Any) -> ValueKind:
    value = _unwrap(value)
    if isinstance(value, PRIMITIVE_TYPES):
        return ValueKind.PRIMITIVE
    if isinstance(value, np.ndarray):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, (set, frozenset)):
        return ValueKind.SET
    return ValueKind.OBJECT


def strict_equal(actual: Any, expected: Any) -> bool:
    """Strict equality: ints and floats compare as numbers, nothing else coerces, NaN equals NaN."""

    actual, expected = _unwrap(actual), _unwrap(expected)
    if actual is expected:
        return True
    if isinstance(actual, PRIMITIVE_TYPES) and isinstance(expected, PRIMITIVE_TYPES):
        if _primitive_family(actual) != _primitive_family(expected):
            return False
        if _is_nan(actual) and _is_nan(expected):
            return True
        return actual == expected
    if kind_of(actual) is not ValueKind.OBJECT or kind_of(expected) is not ValueKind.OBJECT:
        # containers and arrays keep the same strictness for every element
        return compare(actual, expected).equal
    try:
        return bool(actual == expected)
    except Exception:  # pragma: no cover - exotic __eq__/__bool__
        return False


def _primitive_family(value: Any) -> str:
    # int and float share one numeric family; bool stays apart from int.
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def compare(actual: Any, expected: Any, path: str = "$") -> ComparisonResult:
    """Deep-compare ``actual`` against ``expected``."""

    actual, expected = _unwrap(actual), _unwrap(expected)
    actual_kind = kind_of(actual)
    expected_kind = kind_of(expected)
    if actual_kind is not expected_kind:
        return ComparisonResult(
            equal=False,
            path=path,
            actual=actual,
            expected=expected,
            reason=f"kind mismatch: actual is {actual_kind.value}, expected {expected_kind.value}",
        )
    handler = _HANDLERS[actual_kind]
    return handler(actual, expected, path)


def deep_equal(actual: Any, expected: Any) -> bool:
    return compare(actual, expected).equal


def _compare_primitive(actual: Any, expected: Any, path: str) -> ComparisonResult:
    if strict_equal(actual, expected):
        return ComparisonResult(equal=True, path=path)
    reason = None
    if _primitive_family(actual) != _primitive_family(expected):
        reason = f"type mismatch: {type(actual).__name__} vs {type(expected).__name__}"
    return ComparisonResult(equal=False, path=path, actual=actual, expected=expected, reason=reason)


def _compare_sequence(actual: Any, expected: Any, path: str) -> ComparisonResult:
    if len(actual) != len(expected):
        return ComparisonResult(
            equal=False,
            path=path,
            actual=actual,
            expected=expected,
            reason=f"length mismatch: {len(actual)} vs {len(expected)}",
        )
    for index, (act, exp) in enumerate(zip(actual, expected)):
        result = compare(act, exp, f"{path}[{index}]")
        if not result.equal:
            return result
    return ComparisonResult(equal=True, path=path)


def _compare_mapping(actual: Mapping[Any, Any], expected: Mapping[Any, Any], path: str) -> ComparisonResult:
    missing = [key for key in expected if key not in actual]
    extra = [key for key in actual if key not in expected]
    if missing or extra:
        parts = []
        if missing:
            parts.append(f"missing keys {sorted(map(repr, missing))}")
        if extra:
            parts.append(f"unexpected keys {sorted(map(repr, extra))}")
        return ComparisonResult(
            equal=False, path=path, actual=actual, expected=expected, reason="; ".join(parts)
        )
    for key, exp in expected.items():
        result = compare(actual[key], exp, f"{path}[{key!r}]")
        if not result.equal:
            return result
    return ComparisonResult(equal=True, path=path)


def _compare_set(actual: Any, expected: Any, path: str) -> ComparisonResult:
    if set(actual) == set(expected):
        return ComparisonResult(equal=True, path=path)
    missing = set(expected) - set(actual)
    extra = set(actual) - set(expected)
    return ComparisonResult(
        equal=False,
        path=path,
        actual=actual,
        expected=expected,
        reason=f"missing {sorted(map(repr, missing))}; unexpected {sorted(map(repr, extra))}",
    )


def _compare_array(actual: np.ndarray, expected: np.ndarray, path: str) -> ComparisonResult:
    if actual.shape != expected.shape:
        return ComparisonResult(
            equal=False,
            path=path,
            actual=actual,
            expected=expected,
            reason=f"shape mismatch: actual {actual.shape}, expected {expected.shape}",
        )
    if (actual.dtype.kind == "b") != (expected.dtype.kind == "b"):
        return ComparisonResult(
            equal=False,
            path=path,
            actual=actual,
            expected=expected,
            reason=f"dtype mismatch: actual {actual.dtype}, expected {expected.dtype}",
        )
    equal_nan = np.issubdtype(actual.dtype, np.inexact) and np.issubdtype(expected.dtype, np.inexact)
    if np.array_equal(actual, expected, equal_nan=bool(equal_nan)):
        return ComparisonResult(equal=True, path=path)
    mismatched = np.argwhere(~_elementwise_equal(actual, expected, bool(equal_nan)))
    first = tuple(int(i) for i in mismatched[0]) if mismatched.size else ()
    return ComparisonResult(
        equal=False,
        path=f"{path}{list(first)}" if first else path,
        actual=actual[first].item() if first else actual,
        expected=expected[first].item() if first else expected,
        reason=f"{len(mismatched)}/{actual.size} elements differ",
    )


def _elementwise_equal(actual: np.ndarray, expected: np.ndarray, equal_nan: bool) -> np.ndarray:
    same = actual == expected
    if equal_nan:
        same = same | (np.isnan(actual) & np.isnan(expected))
    return np.asarray(same, dtype=bool)


def _compare_object(actual: Any, expected: Any, path: str) -> ComparisonResult:
    if strict_equal(actual, expected):
        return ComparisonResult(equal=True, path=path)
    return ComparisonResult(equal=False, path=path, actual=actual, expected=expected)


_HANDLERS = {
    ValueKind.PRIMITIVE: _compare_primitive,
    ValueKind.SEQUENCE: _compare_sequence,
    ValueKind.MAPPING: _compare_mapping,
    ValueKind.SET: _compare_set,
    ValueKind.ARRAY: _compare_array,
    ValueKind.OBJECT: _compare_object,
}
