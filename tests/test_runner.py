from __future__ import annotations

import asyncio

import pytest

from casekit.core import CaseRegistry, Outcome, TestCase, TestRunner, assert_equal
from casekit.errors import RunnerError


def add(a: int, b: int) -> int:
    return a + b


async def delayed_value(value, delay_s: float):
    await asyncio.sleep(delay_s)
    return value


def test_runner_passes_sync_case() -> None:
    registry = CaseRegistry()
    registry.register("sum", lambda: assert_equal(add(4, 6), 10))
    (result,) = TestRunner().run(registry)
    assert result.outcome is Outcome.PASSED
    assert result.detail is None


def test_runner_awaits_async_case() -> None:
    registry = CaseRegistry()

    @registry.case("async-wait")
    async def work() -> None:
        assert_equal(await delayed_value(1, 0.05), 1)

    (result,) = TestRunner().run(registry)
    assert result.passed
    assert result.duration_s >= 0.04


def test_runner_reports_mismatch_values() -> None:
    registry = CaseRegistry()
    registry.register("mismatch", lambda: assert_equal(1, 2))
    (result,) = TestRunner().run(registry)
    assert result.outcome is Outcome.FAILED
    assert result.detail is not None
    assert result.detail.kind == "assertion"
    assert result.detail.actual == 1
    assert result.detail.expected == 2
    assert result.detail.comparison == "equal"


def test_runner_skips_placeholder() -> None:
    registry = CaseRegistry()
    registry.placeholder("placeholder")
    (result,) = TestRunner().run(registry)
    assert result.outcome is Outcome.SKIPPED
    assert not result.failed


def test_runner_reports_unhandled_errors() -> None:
    registry = CaseRegistry()
    registry.register("boom", lambda: {}["missing"])
    (result,) = TestRunner().run(registry)
    assert result.failed
    assert result.detail.kind == "error"
    assert result.detail.error_type == "KeyError"
    assert "KeyError" in result.detail.traceback


def test_runner_reports_async_rejection() -> None:
    registry = CaseRegistry()

    @registry.case("rejects")
    async def work() -> None:
        await asyncio.sleep(0)
        raise RuntimeError("rejected")

    (result,) = TestRunner().run(registry)
    assert result.failed
    assert result.detail.message == "RuntimeError: rejected"


def test_runner_treats_plain_assert_as_assertion_failure() -> None:
    def work() -> None:
        assert 1 == 2, "numbers differ"

    registry = CaseRegistry()
    registry.register("plain assert", work)
    (result,) = TestRunner().run(registry)
    assert result.failed
    assert result.detail.kind == "assertion"
    assert result.detail.message == "numbers differ"


def test_failures_do_not_stop_later_cases() -> None:
    registry = CaseRegistry()
    registry.register("first", lambda: assert_equal(1, 2))
    registry.register("second", lambda: assert_equal(2, 2))
    registry.placeholder("third")
    results = TestRunner().run(registry)
    assert [result.outcome for result in results] == [Outcome.FAILED, Outcome.PASSED, Outcome.SKIPPED]


def test_fail_fast_stops_after_first_failure() -> None:
    registry = CaseRegistry()
    registry.register("first", lambda: assert_equal(1, 2))
    registry.register("second", lambda: None)
    results = TestRunner(fail_fast=True).run(registry)
    assert [result.label for result in results] == ["first"]


def test_concurrent_results_follow_registration_order() -> None:
    finished: list[str] = []
    registry = CaseRegistry()

    def make(label: str, delay: float):
        async def work() -> None:
            await asyncio.sleep(delay)
            finished.append(label)

        return work

    registry.register("slow", make("slow", 0.06))
    registry.register("medium", make("medium", 0.03))
    registry.register("fast", make("fast", 0.0))
    seen: list[tuple[str, int, int]] = []
    results = TestRunner(concurrent=True).run(
        registry, on_result=lambda result, index, total: seen.append((result.label, index, total))
    )
    assert finished == ["fast", "medium", "slow"]
    assert [result.label for result in results] == ["slow", "medium", "fast"]
    assert seen == [("slow", 1, 3), ("medium", 2, 3), ("fast", 3, 3)]
    assert all(result.passed for result in results)


def test_timeout_marks_case_failed() -> None:
    registry = CaseRegistry()
    registry.register("hangs", lambda: asyncio.sleep(1))
    registry.register("quick", lambda: delayed_value(1, 0))
    results = TestRunner(timeout=0.05).run(registry)
    assert results[0].failed
    assert results[0].detail.kind == "timeout"
    assert results[1].passed


def test_non_positive_timeout_is_rejected() -> None:
    with pytest.raises(RunnerError):
        TestRunner(timeout=0)


def test_malformed_entry_aborts_run() -> None:
    calls: list[str] = []
    good = TestCase(label="good", work=lambda: calls.append("ran"))
    with pytest.raises(RunnerError):
        TestRunner().run([good, "not a case"])  # type: ignore[list-item]
    with pytest.raises(RunnerError):
        TestRunner().run([TestCase(label="bad", work=42)])  # type: ignore[arg-type]
    assert calls == []


def test_run_inside_event_loop_requires_run_async() -> None:
    registry = CaseRegistry()
    registry.register("sum", lambda: assert_equal(add(1, 1), 2))
    runner = TestRunner()

    async def drive():
        with pytest.raises(RunnerError):
            runner.run(registry)
        return await runner.run_async(registry)

    (result,) = asyncio.run(drive())
    assert result.passed


def test_base_exceptions_propagate() -> None:
    class Abort(BaseException):
        pass

    def work() -> None:
        raise Abort()

    registry = CaseRegistry()
    registry.register("abort", work)
    with pytest.raises(Abort):
        TestRunner().run(registry)


def test_cancelled_work_fails_only_its_own_case() -> None:
    registry = CaseRegistry()

    @registry.case("cancelled")
    async def work() -> None:
        future = asyncio.get_running_loop().create_future()
        future.cancel()
        await future

    registry.register("after", lambda: assert_equal(1, 1))
    results = TestRunner().run(registry)
    assert [result.outcome for result in results] == [Outcome.FAILED, Outcome.PASSED]
    assert results[0].detail.kind == "error"
    assert results[0].detail.error_type == "CancelledError"


def test_cancelled_work_with_timeout_is_contained() -> None:
    async def cancelled_task() -> None:
        task = asyncio.ensure_future(asyncio.sleep(1))
        task.cancel()
        await task

    registry = CaseRegistry()
    registry.register("cancelled task", cancelled_task)
    registry.register("after", lambda: assert_equal(2, 2))
    results = TestRunner(timeout=0.5, concurrent=True).run(registry)
    assert results[0].failed
    assert results[0].detail.error_type == "CancelledError"
    assert results[1].passed
