"""Test runner executing registered cases and collecting results."""
from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
import time
import traceback
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Union

from casekit.errors import AssertionFailure, RunnerError

from .models import FailureDetail, Outcome, TestCase
from .registry import CaseRegistry
from .results import RunSummary, TestResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[TestResult, int, int], None]
CaseSource = Union[CaseRegistry, Iterable[TestCase]]


class _CaseTimeout(Exception):
    pass


class TestRunner:
    """Executes test cases on a single event loop.

    Synchronous and asynchronous work are treated alike: the work is called and
    any awaitable it returns is awaited. Results always come back in
    registration order, also when ``concurrent`` lets cases interleave.
    """

    __test__ = False

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        fail_fast: bool = False,
        concurrent: bool = False,
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise RunnerError(f"timeout must be positive, got {timeout}")
        self._timeout = timeout
        self._fail_fast = fail_fast
        self._concurrent = concurrent

    def run(self, cases: CaseSource, *, on_result: Optional[ResultCallback] = None) -> List[TestResult]:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.run_async(cases, on_result=on_result))
        raise RunnerError("TestRunner.run() cannot be called from a running event loop; use run_async()")

    async def run_async(
        self, cases: CaseSource, *, on_result: Optional[ResultCallback] = None
    ) -> List[TestResult]:
        case_list = _validate_cases(cases)
        total = len(case_list)
        start = time.perf_counter()
        results: List[TestResult] = []
        if self._concurrent:
            tasks = [asyncio.ensure_future(self._execute_case(case)) for case in case_list]
            for index, task in enumerate(tasks, start=1):
                result = await task
                results.append(result)
                if on_result:
                    on_result(result, index, total)
        else:
            for index, case in enumerate(case_list, start=1):
                result = await self._execute_case(case)
                results.append(result)
                if on_result:
                    on_result(result, index, total)
                if self._fail_fast and result.failed:
                    logger.info("Stopping after first failure (%s)", case.label)
                    break
        summary = RunSummary.from_results(results, time.perf_counter() - start)
        logger.info(
            "Run finished: total=%d passed=%d failed=%d skipped=%d",
            summary.total,
            summary.passed,
            summary.failed,
            summary.skipped,
        )
        return results

    async def _execute_case(self, case: TestCase) -> TestResult:
        if case.work is None:
            logger.debug("Skipping placeholder %s", case.identifier())
            return TestResult(case=case, outcome=Outcome.SKIPPED)
        logger.debug("Running %s", case.identifier())
        start = time.perf_counter()
        detail: Optional[FailureDetail] = None
        try:
            outcome = case.work()
            if inspect.isawaitable(outcome):
                await self._await_with_timeout(outcome)
        except _CaseTimeout:
            detail = FailureDetail(kind="timeout", message=f"timed out after {self._timeout}s")
        except asyncio.CancelledError as exc:
            if _runner_task_cancelling():
                raise
            detail = FailureDetail(
                kind="error",
                message=f"CancelledError: {exc}" if str(exc) else "CancelledError: work was cancelled",
                error_type="CancelledError",
                traceback=_format_traceback(exc),
            )
        except AssertionFailure as exc:
            detail = FailureDetail(
                kind="assertion",
                message=exc.message,
                expected=exc.expected,
                actual=exc.actual,
                comparison=exc.comparison,
                path=exc.path,
            )
        except AssertionError as exc:
            detail = FailureDetail(
                kind="assertion",
                message=str(exc) or "assertion failed",
                error_type=type(exc).__name__,
                traceback=_format_traceback(exc),
            )
        except Exception as exc:
            detail = FailureDetail(
                kind="error",
                message=f"{type(exc).__name__}: {exc}",
                error_type=type(exc).__name__,
                traceback=_format_traceback(exc),
            )
        duration = time.perf_counter() - start
        if detail is None:
            logger.debug("%s passed in %.3fs", case.identifier(), duration)
            return TestResult(case=case, outcome=Outcome.PASSED, duration_s=duration)
        logger.debug("%s failed: %s", case.identifier(), detail.message)
        return TestResult(case=case, outcome=Outcome.FAILED, duration_s=duration, detail=detail)

    async def _await_with_timeout(self, awaitable: Awaitable[Any]) -> None:
        if self._timeout is None:
            await awaitable
            return
        task = asyncio.ensure_future(awaitable)
        done, _ = await asyncio.wait({task}, timeout=self._timeout)
        if not done:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            raise _CaseTimeout()
        task.result()


def _validate_cases(cases: CaseSource) -> List[TestCase]:
    case_list = list(cases)
    for position, case in enumerate(case_list):
        if not isinstance(case, TestCase):
            raise RunnerError(f"Entry {position} is not a TestCase: {case!r}")
        if case.work is not None and not callable(case.work):
            raise RunnerError(f"Work for test '{case.label}' is not callable")
    return case_list


def _runner_task_cancelling() -> bool:
    # Task.cancelling() exists from Python 3.11 only.
    task = asyncio.current_task()
    cancelling = getattr(task, "cancelling", None)
    return bool(cancelling and cancelling())


def _format_traceback(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
