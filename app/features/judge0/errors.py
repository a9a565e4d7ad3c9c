"""Error taxonomy for the grading core.

Every failure the core can produce derives from :class:`Judge0Error` so that
HTTP handlers can translate them without catching unrelated exceptions.
"""

from __future__ import annotations


class Judge0Error(Exception):
    """Base class for grading core failures."""


class UnsupportedLanguage(Judge0Error):
    def __init__(self, language: str) -> None:
        super().__init__(f"Unsupported language: {language}")
        self.language = language


class RemoteSubmissionError(Judge0Error):
    """Creating the remote job failed (transport, non-2xx, or missing token)."""


class RemotePollError(Judge0Error):
    """Fetching a job snapshot failed; callers retry while attempts remain."""


class CaseTimeout(Judge0Error):
    """Deadline or attempt limit reached without a terminal status."""

    def __init__(self, token: str, elapsed: float, attempts: int) -> None:
        super().__init__(f"Submission {token} not finished after {attempts} attempts ({elapsed:.2f}s)")
        self.token = token
        self.elapsed = elapsed
        self.attempts = attempts


class SuiteExecutionError(Judge0Error):
    """A failure not attributable to a single case; the whole suite degrades."""
