from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.Auth.deps import get_current_user
from app.Auth.schemas import AuthUser
from app.features.submissions.repository import SubmissionsRepository, submissions_repository
from . import builder, languages, statuses
from .errors import RemotePollError, RemoteSubmissionError, UnsupportedLanguage
from .schemas import (
    CodeExecutionResult,
    CreateSubmissionRequest,
    CreateSubmissionResponse,
    Judge0Status,
    LanguageInfo,
    RemoteResult,
    RunCodeRequest,
    RunTestCasesRequest,
    TestCasesResponse,
)
from .service import Judge0Service, judge0_service

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

public_router = APIRouter(prefix="/judge0", tags=["judge0-public"])
protected_router = APIRouter(tags=["judge0-protected"])


def get_judge0_service() -> Judge0Service:
    return judge0_service


def get_submissions_repository() -> SubmissionsRepository:
    return submissions_repository


def _require(**fields: object) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(missing)}",
        )


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------

@public_router.get("/languages", response_model=List[LanguageInfo])
async def get_supported_languages():
    return languages.supported_languages()


@public_router.get("/statuses", response_model=List[Judge0Status])
async def get_submission_statuses():
    return statuses.status_table()


# ---------------------------------------------------------------------------
# Protected endpoints
# ---------------------------------------------------------------------------

@protected_router.post("/runcode", response_model=CodeExecutionResult)
async def run_code(
    payload: RunCodeRequest,
    current_user: AuthUser = Depends(get_current_user),
    service: Judge0Service = Depends(get_judge0_service),
):
    _require(code=payload.code, language=payload.language)
    logger.info("User %s (%s) is running code", current_user.college_id, current_user.role)
    return await service.run_code(payload.code, payload.language, payload.input)


@protected_router.post("/submissions", response_model=CreateSubmissionResponse)
async def create_submission(
    payload: CreateSubmissionRequest,
    current_user: AuthUser = Depends(get_current_user),
    service: Judge0Service = Depends(get_judge0_service),
):
    _require(code=payload.code, language=payload.language)
    logger.info("User %s (%s) is creating a submission", current_user.college_id, current_user.role)
    try:
        request = builder.build(payload.code, payload.language, payload.input, payload.expected_output)
        token = await service.client.create(request)
    except UnsupportedLanguage as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RemoteSubmissionError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to create submission: {exc}") from exc
    return CreateSubmissionResponse(token=token, user_id=current_user.id, user_role=current_user.role)


@protected_router.get("/submissions/{token}", response_model=RemoteResult)
async def get_submission_result(
    token: str,
    current_user: AuthUser = Depends(get_current_user),
    service: Judge0Service = Depends(get_judge0_service),
):
    logger.info("User %s (%s) is fetching submission result", current_user.college_id, current_user.role)
    try:
        return await service.client.fetch(token)
    except RemotePollError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to get submission result: {exc}") from exc


@protected_router.post("/testcases", response_model=TestCasesResponse)
async def run_test_cases(
    payload: RunTestCasesRequest,
    current_user: AuthUser = Depends(get_current_user),
    service: Judge0Service = Depends(get_judge0_service),
    repository: SubmissionsRepository = Depends(get_submissions_repository),
):
    _require(code=payload.code, language=payload.language, problem_id=payload.problem_id)
    test_cases = await repository.list_test_cases(payload.problem_id)
    if not test_cases:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No test cases found for problem {payload.problem_id}",
        )
    logger.info("User %s (%s) is running test cases", current_user.college_id, current_user.role)
    # hidden cases still count towards status but are not shown to students
    result = await service.run_test_cases(payload.code, payload.language, test_cases, include_hidden=False)
    return TestCasesResponse(**result.model_dump(), user_id=current_user.id, user_role=current_user.role)
