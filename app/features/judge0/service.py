from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from app.Core.config import Settings, get_settings
from . import builder, languages, statuses
from .client import Judge0Client
from .errors import CaseTimeout, Judge0Error, RemoteSubmissionError, SuiteExecutionError
from .polling import CasePoller, PollPolicy
from .schemas import (
    CaseResult,
    CodeExecutionResult,
    DomainStatus,
    SuiteResult,
    TestCase,
)

logger = logging.getLogger(__name__)


def overall_status(passed: int, total: int) -> DomainStatus:
    if passed == total:
        return DomainStatus.COMPLETED
    if passed > 0:
        return DomainStatus.FAILED
    return DomainStatus.ERROR


def aggregate(results: Sequence[CaseResult]) -> SuiteResult:
    """Build the authoritative suite result (every case, hidden included)."""
    all_total = len(results)
    all_passed = sum(1 for r in results if r.passed)
    visible = [r for r in results if not r.is_hidden]
    return SuiteResult(
        visible_passed=sum(1 for r in visible if r.passed),
        visible_total=len(visible),
        cases=list(results),
        overall_status=overall_status(all_passed, all_total),
        hidden_count=all_total - len(visible),
        all_passed=all_passed,
        all_total=all_total,
    )


def project(result: SuiteResult, include_hidden: bool) -> SuiteResult:
    """Requester view of ``result``; only the ``cases`` list is filtered."""
    if include_hidden:
        return result
    return result.model_copy(update={"cases": [c for c in result.cases if not c.is_hidden]})


def _error_case(test_case: TestCase, message: str) -> CaseResult:
    return CaseResult(
        input=test_case.input,
        expected_output=test_case.output,
        actual_output=None,
        error=message,
        passed=False,
        status_description="Error",
        execution_time=None,
        memory=None,
        is_hidden=test_case.is_hidden,
    )


class Judge0Service:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[Judge0Client] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = client or Judge0Client(self.settings)
        self.suite_policy = PollPolicy.for_suite(self.settings)
        self.run_policy = PollPolicy.for_single_run(self.settings)

    def _poller(self, policy: PollPolicy) -> CasePoller:
        return CasePoller(self.client, policy)

    async def _run_case(self, poller: CasePoller, test_case: TestCase, code: str, language: str) -> CaseResult:
        try:
            return await poller.run_case(test_case, code, language)
        except RemoteSubmissionError as exc:
            logger.warning("Submission failed for test case (hidden=%s): %s", test_case.is_hidden, exc)
            return _error_case(test_case, str(exc))

    async def run_test_cases(
        self,
        code: str,
        language_name: str,
        test_cases: Sequence[TestCase],
        include_hidden: bool = False,
    ) -> SuiteResult:
        """Grade ``code`` against every test case concurrently.

        Status and the ``all_*`` counts always cover hidden cases; whether
        their details appear in ``cases`` depends on ``include_hidden``.
        """
        cases: List[TestCase] = list(test_cases)
        logger.info("Running %d test cases (include_hidden=%s)", len(cases), include_hidden)
        try:
            result = await self._run_suite(code, language_name, cases)
        except SuiteExecutionError as exc:
            logger.error("Error running test cases: %s", exc)
            result = aggregate([_error_case(tc, str(exc)) for tc in cases]).model_copy(
                update={"overall_status": DomainStatus.ERROR}
            )
        return project(result, include_hidden)

    async def _run_suite(self, code: str, language_name: str, cases: List[TestCase]) -> SuiteResult:
        try:
            languages.resolve(language_name)
            poller = self._poller(self.suite_policy)
            tasks = [
                asyncio.ensure_future(self._run_case(poller, tc, code, language_name)) for tc in cases
            ]
            try:
                results = await asyncio.gather(*tasks)
            finally:
                # a failed case must not leave its siblings polling Judge0
                for task in tasks:
                    if not task.done():
                        task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
        except Judge0Error as exc:
            raise SuiteExecutionError(str(exc)) from exc
        except Exception as exc:
            logger.exception("Unexpected failure while running test cases")
            raise SuiteExecutionError(f"An error occurred while running tests: {exc}") from exc

        tle = statuses.describe(statuses.TIME_LIMIT_EXCEEDED)
        timed_out = sum(1 for r in results if r.status_description == tle)
        if timed_out:
            logger.info(
                "%d out of %d test cases timed out (>%gs)",
                timed_out,
                len(results),
                self.suite_policy.deadline,
            )
        return aggregate(results)

    async def run_code(self, code: str, language_name: str, input: Optional[str] = None) -> CodeExecutionResult:
        """One-shot execution without expected output; never raises."""
        poller = self._poller(self.run_policy)
        try:
            request = builder.build(code, language_name, input)
            token = await self.client.create(request)
            result = await poller.wait(token)
        except CaseTimeout as exc:
            logger.warning("Single run timed out: %s", exc)
            return self._run_error("Execution timed out")
        except Judge0Error as exc:
            logger.warning("Single run failed: %s", exc)
            return self._run_error(str(exc))
        except Exception as exc:
            logger.exception("Error running code")
            return self._run_error(str(exc) or "An error occurred during execution")

        return CodeExecutionResult(
            status="success" if statuses.is_accepted(result.status_id) else "error",
            status_description=statuses.describe(result.status_id),
            db_status=statuses.to_domain(result.status_id),
            output=result.decoded_compile_output or result.decoded_stdout,
            error=result.decoded_stderr or result.decoded_compile_output,
            execution_time=result.time_seconds,
            memory=result.memory,
        )

    @staticmethod
    def _run_error(message: str) -> CodeExecutionResult:
        return CodeExecutionResult(
            status="error",
            status_description="Execution Error",
            db_status=DomainStatus.ERROR,
            output=None,
            error=message,
            execution_time=None,
            memory=None,
        )


judge0_service = Judge0Service()
