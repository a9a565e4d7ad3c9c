from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from app.Core.config import Settings
from . import builder, statuses
from .client import Judge0Client
from .errors import CaseTimeout, RemotePollError
from .schemas import CaseResult, RemoteResult, TestCase

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class PollPolicy:
    """Bounded sleep-then-fetch retry policy.

    A poll ends after ``max_attempts`` fetch attempts or once ``deadline``
    seconds have elapsed since polling started, whichever comes first.
    """

    interval: float = 1.0
    max_attempts: int = 6
    deadline: float = 6.0

    def delay(self, attempt: int) -> float:
        return self.interval

    def expired(self, elapsed: float) -> bool:
        return elapsed > self.deadline

    @classmethod
    def for_suite(cls, settings: Settings) -> "PollPolicy":
        return cls(
            interval=settings.poll_interval_s,
            max_attempts=settings.max_polling_attempts,
            deadline=settings.test_case_timeout_s,
        )

    @classmethod
    def for_single_run(cls, settings: Settings) -> "PollPolicy":
        return cls(
            interval=settings.poll_interval_s,
            max_attempts=settings.run_max_attempts,
            deadline=settings.run_timeout_s,
        )


def _seconds_label(seconds: float) -> str:
    return f"{seconds:g}s"


class CasePoller:
    def __init__(
        self,
        client: Judge0Client,
        policy: PollPolicy,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.client = client
        self.policy = policy
        self._clock = clock
        self._sleep = sleep

    async def wait(self, token: str) -> RemoteResult:
        """Poll ``token`` until Judge0 reports a terminal status.

        Raises :class:`CaseTimeout` when the deadline passes or the attempt
        limit is reached. Fetch failures only consume an attempt.
        """
        start = self._clock()
        attempt = 0
        while attempt < self.policy.max_attempts:
            await self._sleep(self.policy.delay(attempt))
            elapsed = self._clock() - start
            if self.policy.expired(elapsed):
                raise CaseTimeout(token, elapsed, attempt)
            attempt += 1
            try:
                result = await self.client.fetch(token)
            except RemotePollError as exc:
                logger.warning("Error polling submission %s (attempt %d): %s", token, attempt, exc)
                continue
            if statuses.is_terminal(result.status_id):
                return result
        raise CaseTimeout(token, self._clock() - start, attempt)

    async def run_case(self, test_case: TestCase, code: str, language_name: str) -> CaseResult:
        request = builder.build(code, language_name, test_case.input, test_case.output)
        token = await self.client.create(request)
        try:
            result = await self.wait(token)
        except CaseTimeout as exc:
            logger.info("Test case timed out after %s: %s", _seconds_label(self.policy.deadline), exc)
            return self.timed_out(test_case)
        return self.to_case_result(test_case, result)

    def timed_out(self, test_case: TestCase) -> CaseResult:
        return CaseResult(
            input=test_case.input,
            expected_output=test_case.output,
            actual_output=None,
            error=f"Test case execution timed out ({_seconds_label(self.policy.deadline)} limit exceeded)",
            passed=False,
            status_description=statuses.describe(statuses.TIME_LIMIT_EXCEEDED),
            execution_time=self.policy.deadline,
            memory=None,
            is_hidden=test_case.is_hidden,
        )

    def to_case_result(self, test_case: TestCase, result: RemoteResult) -> CaseResult:
        if result.status_id == statuses.TIME_LIMIT_EXCEEDED:
            return CaseResult(
                input=test_case.input,
                expected_output=test_case.output,
                actual_output=result.decoded_stdout,
                error=result.decoded_stderr or "Time limit exceeded",
                passed=False,
                status_description=statuses.describe(statuses.TIME_LIMIT_EXCEEDED),
                execution_time=result.time_seconds or self.policy.deadline,
                memory=result.memory,
                is_hidden=test_case.is_hidden,
            )
        return CaseResult(
            input=test_case.input,
            expected_output=test_case.output,
            actual_output=result.decoded_stdout,
            error=result.decoded_stderr or result.decoded_compile_output,
            passed=statuses.is_accepted(result.status_id),
            status_description=statuses.describe(result.status_id),
            execution_time=result.time_seconds,
            memory=result.memory,
            is_hidden=test_case.is_hidden,
        )
