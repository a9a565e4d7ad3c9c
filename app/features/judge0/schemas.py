from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class DomainStatus(str, Enum):
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    ERROR = "ERROR"


class LanguageInfo(BaseModel):
    id: int
    name: str


class Judge0Status(BaseModel):
    id: int
    description: str


class JobRequest(BaseModel):
    """Create-submission body; field order is the wire order Judge0 receives."""

    source_code: str
    language_id: str
    number_of_runs: Optional[int] = None
    stdin: Optional[str] = None
    expected_output: Optional[str] = None
    cpu_time_limit: Optional[float] = None
    cpu_extra_time: Optional[float] = None
    wall_time_limit: Optional[float] = None
    memory_limit: Optional[int] = None
    stack_limit: Optional[int] = None
    max_processes_and_or_threads: Optional[int] = None
    enable_per_process_and_thread_time_limit: Optional[bool] = None
    enable_per_process_and_thread_memory_limit: Optional[bool] = None
    max_file_size: Optional[int] = None
    enable_network: Optional[bool] = None


class RemoteResult(BaseModel):
    token: Optional[str] = None
    status_id: Optional[int] = None
    status_description: Optional[str] = None
    # raw base64 payloads as returned by Judge0
    stdout: Optional[str] = None
    stderr: Optional[str] = None
    compile_output: Optional[str] = None
    message: Optional[str] = None
    time: Optional[str] = None
    memory: Optional[int] = None
    decoded_stdout: Optional[str] = None
    decoded_stderr: Optional[str] = None
    decoded_compile_output: Optional[str] = None
    decoded_message: Optional[str] = None

    @property
    def time_seconds(self) -> Optional[float]:
        if self.time is None:
            return None
        try:
            return float(self.time)
        except (TypeError, ValueError):
            return None


class TestCase(BaseModel):
    __test__ = False  # not a pytest class

    input: str = ""
    output: str = ""
    is_hidden: bool = False


class CaseResult(BaseModel):
    input: str
    expected_output: str
    actual_output: Optional[str] = None
    error: Optional[str] = None
    passed: bool = False
    status_description: str
    execution_time: Optional[float] = None
    memory: Optional[int] = None
    is_hidden: bool = False


class SuiteResult(BaseModel):
    visible_passed: int
    visible_total: int
    cases: List[CaseResult] = Field(default_factory=list)
    overall_status: DomainStatus
    hidden_count: int = 0
    all_passed: int
    all_total: int


class CodeExecutionResult(BaseModel):
    status: Literal["success", "error"]
    status_description: str
    db_status: DomainStatus
    output: Optional[str] = None
    error: Optional[str] = None
    execution_time: Optional[float] = None
    memory: Optional[int] = None


# ---------------------------------------------------------------------------
# HTTP payloads
# ---------------------------------------------------------------------------

class RunCodeRequest(BaseModel):
    code: Optional[str] = None
    language: Optional[str] = None
    input: Optional[str] = None


class CreateSubmissionRequest(BaseModel):
    code: Optional[str] = None
    language: Optional[str] = None
    input: Optional[str] = None
    expected_output: Optional[str] = None


class CreateSubmissionResponse(BaseModel):
    token: str
    message: str = "Submission created successfully"
    user_id: Optional[str] = None
    user_role: Optional[str] = None


class RunTestCasesRequest(BaseModel):
    code: Optional[str] = None
    language: Optional[str] = None
    problem_id: Optional[str] = None


class TestCasesResponse(SuiteResult):
    user_id: Optional[str] = None
    user_role: Optional[str] = None
