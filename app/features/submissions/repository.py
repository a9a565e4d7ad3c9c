from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from app.features.judge0.schemas import TestCase
from .schemas import ProblemSchema, SubmissionRecord

logger = logging.getLogger(__name__)


class SubmissionsRepository:
    """In-process problem and submission store.

    Submissions are unique per ``(student_id, problem_id)``; saving again
    updates the existing record in place.
    """

    def __init__(self) -> None:
        self._problems: Dict[str, ProblemSchema] = {}
        self._submissions: Dict[Tuple[str, str], SubmissionRecord] = {}

    def add_problem(self, problem: ProblemSchema) -> None:
        self._problems[problem.id] = problem

    def load_problems(self, path: str | Path) -> int:
        """Load problems from a JSON file holding a list of problem objects."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        items = data.get("problems", []) if isinstance(data, dict) else data
        for item in items:
            self.add_problem(ProblemSchema(**item))
        logger.info("Loaded %d problems from %s", len(items), path)
        return len(items)

    async def get_problem(self, problem_id: str) -> Optional[ProblemSchema]:
        return self._problems.get(problem_id)

    async def list_test_cases(self, problem_id: str) -> List[TestCase]:
        problem = self._problems.get(problem_id)
        if problem is None:
            return []
        return list(problem.test_cases)

    async def get_submission(self, student_id: str, problem_id: str) -> Optional[SubmissionRecord]:
        return self._submissions.get((student_id, problem_id))

    async def upsert_submission(self, *, student_id: str, problem_id: str, **fields: Any) -> Tuple[SubmissionRecord, bool]:
        """Create or update a submission; returns ``(record, is_update)``."""
        now = datetime.now(timezone.utc)
        key = (student_id, problem_id)
        existing = self._submissions.get(key)
        if existing is not None:
            record = existing.model_copy(update={**fields, "updated_at": now, "is_submitted": True})
            self._submissions[key] = record
            return record, True
        record = SubmissionRecord(
            id=str(uuid4()),
            student_id=student_id,
            problem_id=problem_id,
            created_at=now,
            updated_at=now,
            **fields,
        )
        self._submissions[key] = record
        return record, False

    def clear(self) -> None:
        self._problems.clear()
        self._submissions.clear()


submissions_repository = SubmissionsRepository()

__all__ = ["submissions_repository", "SubmissionsRepository"]
