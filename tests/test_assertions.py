import pytest

from casekit.core import (
    assert_deep_equal,
    assert_equal,
    assert_false,
    assert_not_equal,
    assert_throws,
    assert_true,
)
from casekit.errors import AssertionFailure


def test_assert_equal_passes_for_equal_primitives() -> None:
    assert_equal(4 + 6, 10)
    assert_equal("My string is 10", "My string is 10")
    assert_equal(True, True)


def test_assert_equal_failure_carries_values() -> None:
    with pytest.raises(AssertionFailure) as exc:
        assert_equal(1, 2)
    assert exc.value.actual == 1
    assert exc.value.expected == 2
    assert exc.value.comparison == "equal"
    assert "expected 2, got 1" in str(exc.value)


def test_assert_equal_is_strict_about_bools() -> None:
    with pytest.raises(AssertionFailure):
        assert_equal(1, True)
    with pytest.raises(AssertionFailure):
        assert_equal([True], [1])


def test_assert_not_equal() -> None:
    assert_not_equal(1, 2)
    with pytest.raises(AssertionFailure) as exc:
        assert_not_equal("a", "a")
    assert exc.value.comparison == "not_equal"


def test_assert_deep_equal_reports_path() -> None:
    assert_deep_equal({"a": [1, 2]}, {"a": [1, 2]})
    with pytest.raises(AssertionFailure) as exc:
        assert_deep_equal({"a": [1, 2]}, {"a": [1, 3]})
    failure = exc.value
    assert failure.comparison == "deep_equal"
    assert failure.path == "$['a'][1]"
    assert failure.actual == 2
    assert failure.expected == 3


def test_assert_throws_returns_exception() -> None:
    def boom() -> None:
        raise ValueError("bad value 42")

    exc = assert_throws(boom, expected=ValueError, match=r"\d+")
    assert isinstance(exc, ValueError)


def test_assert_throws_fails_when_nothing_raised() -> None:
    with pytest.raises(AssertionFailure) as exc:
        assert_throws(lambda: None)
    assert "nothing was raised" in str(exc.value)
    assert exc.value.comparison == "throws"


def test_assert_throws_fails_on_wrong_type() -> None:
    def boom() -> None:
        raise KeyError("x")

    with pytest.raises(AssertionFailure) as exc:
        assert_throws(boom, expected=ValueError)
    assert exc.value.actual == "KeyError"


def test_assert_throws_fails_on_message_mismatch() -> None:
    def boom() -> None:
        raise ValueError("nope")

    with pytest.raises(AssertionFailure):
        assert_throws(boom, expected=(TypeError, ValueError), match="^yes")


def test_assert_throws_passes_arguments() -> None:
    assert_throws(int, "not a number", expected=ValueError)


def test_truthiness_assertions() -> None:
    assert_true([1])
    assert_false([])
    with pytest.raises(AssertionFailure):
        assert_true(0)
    with pytest.raises(AssertionFailure):
        assert_false("x")
