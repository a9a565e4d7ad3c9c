from __future__ import annotations

from typing import Dict, List, Optional

from .schemas import DomainStatus, Judge0Status


STATUS_CODES: Dict[int, str] = {
    1: "In Queue",
    2: "Processing",
    3: "Accepted",
    4: "Wrong Answer",
    5: "Time Limit Exceeded",
    6: "Compilation Error",
    7: "Runtime Error (SIGSEGV)",
    8: "Runtime Error (SIGXFSZ)",
    9: "Runtime Error (SIGFPE)",
    10: "Runtime Error (SIGABRT)",
    11: "Runtime Error (NZEC)",
    12: "Runtime Error (Other)",
    13: "Internal Error",
    14: "Exec Format Error",
}

ACCEPTED = 3
TIME_LIMIT_EXCEEDED = 5


def describe(status_id: Optional[int]) -> str:
    return STATUS_CODES.get(status_id, "Unknown")


def to_domain(status_id: Optional[int]) -> DomainStatus:
    if status_id in (1, 2):
        return DomainStatus.RUNNING
    if status_id == ACCEPTED:
        return DomainStatus.COMPLETED
    if status_id == 4:
        return DomainStatus.FAILED
    # 5-14 and anything Judge0 adds later
    return DomainStatus.ERROR


def is_terminal(status_id: Optional[int]) -> bool:
    return status_id is not None and status_id >= ACCEPTED


def is_accepted(status_id: Optional[int]) -> bool:
    return status_id == ACCEPTED


def status_table() -> List[Judge0Status]:
    return [Judge0Status(id=sid, description=desc) for sid, desc in STATUS_CODES.items()]
