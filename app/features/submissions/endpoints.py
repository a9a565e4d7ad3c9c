from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.Auth.deps import get_current_user
from app.Auth.schemas import AuthUser
from .schemas import SubmitAndTestRequest, SubmitAndTestResponse
from .service import SubmissionsService, submissions_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submissions", tags=["submissions"])


def get_submissions_service() -> SubmissionsService:
    return submissions_service


@router.post("/submit-and-test", response_model=SubmitAndTestResponse, status_code=status.HTTP_201_CREATED)
async def submit_and_test(
    payload: SubmitAndTestRequest,
    current_user: AuthUser = Depends(get_current_user),
    service: SubmissionsService = Depends(get_submissions_service),
):
    """Run all tests (hidden included) and save the submission in one step."""
    if not payload.code or not payload.language or not payload.problem_id or not payload.assessment_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="code, language, problem_id, and assessment_id are required",
        )
    student_id = payload.student_id or current_user.id
    logger.info(
        "User %s (ID: %s) is submitting code for problem %s",
        current_user.college_id,
        student_id,
        payload.problem_id,
    )
    try:
        record, is_update = await service.submit_and_test(
            code=payload.code,
            language=payload.language,
            problem_id=payload.problem_id,
            student_id=student_id,
            assessment_id=payload.assessment_id,
        )
    except ValueError as exc:
        if str(exc) == "problem_missing_tests":
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No test cases found for problem {payload.problem_id}",
            ) from exc
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return SubmitAndTestResponse(is_update=is_update, data=record, submitted_by=current_user.college_id)
