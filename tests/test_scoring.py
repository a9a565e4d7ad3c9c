import pytest

from app.features.judge0.schemas import CaseResult
from app.features.submissions.scoring import compute_score, execution_stats, round_half_up


@pytest.mark.parametrize(
    "passed, total, max_score, expected",
    [
        (3, 3, 50, 50),
        (1, 3, 100, 33),
        (2, 3, 100, 67),
        (1, 8, 100, 13),  # 12.5 rounds up
        (0, 4, 100, 0),
        (3, 3, None, 100),
        (2, 3, None, 0),
        (2, 3, 0, 0),
        (0, 0, 100, 0),
    ],
)
def test_compute_score(passed, total, max_score, expected):
    assert compute_score(passed, total, max_score) == expected


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.49) == 0


def _case(time=None, memory=None, error=None):
    return CaseResult(
        input="",
        expected_output="",
        passed=error is None,
        status_description="Accepted",
        execution_time=time,
        memory=memory,
        error=error,
    )


def test_execution_stats_ignore_missing_values():
    stats = execution_stats([
        _case(time=0.1, memory=100),
        _case(time=0.3, memory=301),
        _case(error="Traceback"),
        _case(error="second"),
    ])

    assert stats.average_execution_time == pytest.approx(0.2)
    assert stats.average_memory == 200
    assert stats.error_message == "Traceback"


def test_execution_stats_empty():
    stats = execution_stats([])
    assert stats.average_execution_time is None
    assert stats.average_memory is None
    assert stats.error_message is None
