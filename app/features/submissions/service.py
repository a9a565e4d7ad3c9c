from __future__ import annotations

import logging
from typing import Optional

from app.features.judge0.service import Judge0Service, judge0_service, project
from .repository import SubmissionsRepository, submissions_repository
from .schemas import SubmissionRecord
from .scoring import execution_stats, suite_score

logger = logging.getLogger(__name__)


class SubmissionsService:
    def __init__(
        self,
        judge0: Optional[Judge0Service] = None,
        repository: Optional[SubmissionsRepository] = None,
    ) -> None:
        self.judge0 = judge0 or judge0_service
        self.repository = repository or submissions_repository

    async def submit_and_test(
        self,
        *,
        code: str,
        language: str,
        problem_id: str,
        student_id: str,
        assessment_id: Optional[str] = None,
    ) -> tuple[SubmissionRecord, bool]:
        """Run every test case (hidden included), score, and upsert the submission.

        Raises ``ValueError("problem_missing_tests")`` when the problem has no
        test cases configured.
        """
        test_cases = await self.repository.list_test_cases(problem_id)
        if not test_cases:
            raise ValueError("problem_missing_tests")

        logger.info(
            "Running %d test cases for problem %s (timeout: %gs per test)",
            len(test_cases),
            problem_id,
            self.judge0.suite_policy.deadline,
        )
        result = await self.judge0.run_test_cases(code, language, test_cases, include_hidden=True)

        problem = await self.repository.get_problem(problem_id)
        max_score = problem.score if problem else None
        score = suite_score(result, max_score)
        stats = execution_stats(result.cases)

        record, is_update = await self.repository.upsert_submission(
            student_id=student_id,
            problem_id=problem_id,
            code=code,
            language=language,
            assessment_id=assessment_id,
            status=result.overall_status,
            score=score,
            execution_time=stats.average_execution_time,
            memory_used=stats.average_memory,
            error_message=stats.error_message,
            test_results=project(result, include_hidden=False),
        )
        logger.info("Submission saved with ID: %s, Score: %s/%s", record.id, score, max_score or 100)
        return record, is_update


submissions_service = SubmissionsService()
