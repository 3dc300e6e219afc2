"""Assertion primitives used inside test case work."""
from __future__ import annotations

import re
from typing import Any, Callable, Optional, Tuple, Type, Union

from casekit.errors import AssertionFailure

from .comparator import compare, strict_equal

ExceptionTypes = Union[Type[BaseException], Tuple[Type[BaseException], ...]]


def assert_equal(actual: Any, expected: Any, message: Optional[str] = None) -> None:
    """Fail unless ``actual`` strictly equals ``expected``."""

    if strict_equal(actual, expected):
        return
    raise AssertionFailure(
        message or f"expected {expected!r}, got {actual!r}",
        expected=expected,
        actual=actual,
        comparison="equal",
    )


def assert_not_equal(actual: Any, expected: Any, message: Optional[str] = None) -> None:
    if not strict_equal(actual, expected):
        return
    raise AssertionFailure(
        message or f"expected a value different from {expected!r}",
        expected=expected,
        actual=actual,
        comparison="not_equal",
    )


def assert_deep_equal(actual: Any, expected: Any, message: Optional[str] = None) -> None:
    """Fail unless ``actual`` and ``expected`` are structurally equal.

    The failure carries the path of the first difference and the values found
    there; the complete values are kept in the message.
    """

    result = compare(actual, expected)
    if result.equal:
        return
    detail = f" ({result.reason})" if result.reason else ""
    raise AssertionFailure(
        message
        or f"values differ at {result.path}: expected {result.expected!r}, got {result.actual!r}{detail}",
        expected=result.expected,
        actual=result.actual,
        comparison="deep_equal",
        path=result.path,
    )


def assert_true(value: Any, message: Optional[str] = None) -> None:
    if value:
        return
    raise AssertionFailure(
        message or f"expected a truthy value, got {value!r}",
        expected=True,
        actual=value,
        comparison="truthy",
    )


def assert_false(value: Any, message: Optional[str] = None) -> None:
    if not value:
        return
    raise AssertionFailure(
        message or f"expected a falsy value, got {value!r}",
        expected=False,
        actual=value,
        comparison="falsy",
    )


def assert_throws(
    func: Callable[..., Any],
    *args: Any,
    expected: ExceptionTypes = Exception,
    match: Optional[str] = None,
    **kwargs: Any,
) -> BaseException:
    """Call ``func`` and fail unless it raises ``expected``.

    ``match`` is a regular expression searched in ``str(exc)``. The raised
    exception is returned for further checks.
    """

    expected_name = _describe(expected)
    try:
        func(*args, **kwargs)
    except expected as exc:
        if match is not None and not re.search(match, str(exc)):
            raise AssertionFailure(
                f"{type(exc).__name__} message {str(exc)!r} does not match {match!r}",
                expected=match,
                actual=str(exc),
                comparison="throws",
            ) from exc
        return exc
    except Exception as exc:
        raise AssertionFailure(
            f"expected {expected_name} to be raised, got {type(exc).__name__}: {exc}",
            expected=expected_name,
            actual=type(exc).__name__,
            comparison="throws",
        ) from exc
    raise AssertionFailure(
        f"expected {expected_name} to be raised, but nothing was raised",
        expected=expected_name,
        actual=None,
        comparison="throws",
    )


def _describe(expected: ExceptionTypes) -> str:
    if isinstance(expected, tuple):
        return " or ".join(item.__name__ for item in expected)
    return expected.__name__
