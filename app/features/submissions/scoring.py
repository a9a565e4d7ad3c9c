from __future__ import annotations

import math
from statistics import mean
from typing import Optional, Sequence

from app.features.judge0.schemas import CaseResult, SuiteResult
from .schemas import ExecutionStats

DEFAULT_FULL_SCORE = 100


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_score(all_passed: int, all_total: int, max_score: Optional[int]) -> int:
    """Score over every case, hidden ones included."""
    if max_score:
        if all_total <= 0:
            return 0
        return round_half_up(all_passed / all_total * max_score)
    return DEFAULT_FULL_SCORE if all_total > 0 and all_passed == all_total else 0


def suite_score(result: SuiteResult, max_score: Optional[int]) -> int:
    return compute_score(result.all_passed, result.all_total, max_score)


def execution_stats(cases: Sequence[CaseResult]) -> ExecutionStats:
    times = [c.execution_time for c in cases if c.execution_time is not None]
    memories = [c.memory for c in cases if c.memory is not None]
    error = next((c.error for c in cases if c.error), None)
    return ExecutionStats(
        average_execution_time=mean(times) if times else None,
        average_memory=int(mean(memories)) if memories else None,
        error_message=error,
    )
