from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.features.judge0.schemas import DomainStatus, SuiteResult, TestCase


class ProblemSchema(BaseModel):
	id: str
	title: Optional[str] = None
	score: Optional[int] = None
	test_cases: List[TestCase] = Field(default_factory=list)


class SubmitAndTestRequest(BaseModel):
	code: Optional[str] = None
	language: Optional[str] = None
	problem_id: Optional[str] = None
	assessment_id: Optional[str] = None
	student_id: Optional[str] = None


class ExecutionStats(BaseModel):
	average_execution_time: Optional[float] = None
	average_memory: Optional[int] = None
	error_message: Optional[str] = None


class SubmissionRecord(BaseModel):
	id: str
	code: str
	language: str
	status: DomainStatus
	score: int
	student_id: str
	problem_id: str
	assessment_id: Optional[str] = None
	execution_time: Optional[float] = None
	memory_used: Optional[int] = None
	error_message: Optional[str] = None
	# hidden case details are never stored
	test_results: Optional[SuiteResult] = None
	is_submitted: bool = True
	created_at: datetime
	updated_at: datetime


class SubmitAndTestResponse(BaseModel):
	success: bool = True
	message: str = "Code submitted and tested successfully"
	is_update: bool = False
	data: SubmissionRecord
	submitted_by: Optional[str] = None
