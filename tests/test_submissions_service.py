import json

import pytest

from app.features.judge0.schemas import DomainStatus, TestCase
from app.features.judge0.service import Judge0Service
from app.features.submissions.repository import SubmissionsRepository
from app.features.submissions.schemas import ProblemSchema
from app.features.submissions.service import SubmissionsService


@pytest.fixture
def repository():
    repo = SubmissionsRepository()
    repo.add_problem(
        ProblemSchema(
            id="p-1",
            score=30,
            test_cases=[
                TestCase(input="1", output="1"),
                TestCase(input="2", output="4"),
                TestCase(input="3", output="9", is_hidden=True),
            ],
        )
    )
    repo.add_problem(ProblemSchema(id="empty", score=10))
    return repo


@pytest.fixture
def service(settings, fake_judge0, repository):
    return SubmissionsService(judge0=Judge0Service(settings, client=fake_judge0), repository=repository)


@pytest.mark.anyio
async def test_submit_and_test_scores_hidden_cases(service, fake_judge0, result_factory):
    fake_judge0.script("1", result_factory(3, time="0.1", memory=100))
    fake_judge0.script("2", result_factory(4, stderr="AssertionError", time="0.3", memory=300))
    fake_judge0.script("3", result_factory(3, time="0.2", memory=200))

    record, is_update = await service.submit_and_test(
        code="print(x*x)",
        language="Python",
        problem_id="p-1",
        student_id="s-1",
        assessment_id="a-1",
    )

    assert is_update is False
    assert record.status == DomainStatus.FAILED
    assert record.score == 20
    assert record.execution_time == pytest.approx(0.2)
    assert record.memory_used == 200
    assert record.error_message == "AssertionError"
    stored = record.test_results
    assert stored.all_passed == 2
    assert stored.all_total == 3
    assert stored.visible_passed == 1
    assert stored.hidden_count == 1
    assert all(not c.is_hidden for c in stored.cases)
    assert [c.input for c in stored.cases] == ["1", "2"]


@pytest.mark.anyio
async def test_resubmission_updates_record(service, fake_judge0, result_factory):
    for stdin in ("1", "2", "3"):
        fake_judge0.script(stdin, result_factory(3))

    first, _ = await service.submit_and_test(code="a", language="Python", problem_id="p-1", student_id="s-1")
    second, is_update = await service.submit_and_test(code="b", language="Python", problem_id="p-1", student_id="s-1")

    assert is_update is True
    assert second.id == first.id
    assert second.code == "b"
    assert second.score == 30
    assert second.status == DomainStatus.COMPLETED


@pytest.mark.anyio
async def test_problem_without_tests_is_rejected(service):
    with pytest.raises(ValueError, match="problem_missing_tests"):
        await service.submit_and_test(code="a", language="Python", problem_id="empty", student_id="s-1")
    with pytest.raises(ValueError, match="problem_missing_tests"):
        await service.submit_and_test(code="a", language="Python", problem_id="missing", student_id="s-1")


def test_load_problems_from_file(tmp_path):
    path = tmp_path / "problems.json"
    path.write_text(
        json.dumps([
            {"id": "sum", "score": 10, "test_cases": [{"input": "1 2", "output": "3", "is_hidden": True}]},
        ]),
        encoding="utf-8",
    )
    repo = SubmissionsRepository()

    assert repo.load_problems(path) == 1
    assert repo._problems["sum"].test_cases[0].is_hidden is True
