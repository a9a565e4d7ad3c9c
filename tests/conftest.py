import base64
import sys
import os

# Ensure repo root on sys.path for imports like `app...`
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest

from app.Core.config import Settings
from app.features.judge0.client import Judge0Client
from app.features.judge0.schemas import JobRequest, RemoteResult


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    s = Settings()
    s.judge0_api_url = "http://judge0.test/submissions"
    s.judge0_api_key = ""
    s.judge0_host = ""
    s.poll_interval_s = 0.0
    s.test_case_timeout_s = 6.0
    s.max_polling_attempts = 6
    s.run_max_attempts = 10
    s.run_timeout_s = 10.0
    s.jwt_secret = "test-secret"
    return s


def _b64(text):
    if text is None:
        return None
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def make_result(status_id, *, stdout=None, stderr=None, compile_output=None, time="0.01", memory=64):
    """RemoteResult as the client would build it from a base64 Judge0 payload."""
    payload = {
        "status": {"id": status_id, "description": "from judge0"},
        "stdout": _b64(stdout),
        "stderr": _b64(stderr),
        "compile_output": _b64(compile_output),
        "message": None,
        "time": time,
        "memory": memory,
    }
    return Judge0Client._to_remote_result("tok", payload)


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeJudge0:
    """Stand-in for Judge0Client keyed by the normalised stdin of each job.

    ``script(stdin, *snapshots)`` queues fetch responses for jobs created with
    that stdin; the last snapshot repeats. Exceptions in the queue are raised.
    Jobs without a script stay "In Queue" forever.
    """

    def __init__(self):
        self.created = []
        self.fetches = []
        self._scripts = {}
        self._create_errors = {}
        self._queues = {}

    def script(self, stdin, *snapshots):
        self._scripts[stdin] = list(snapshots)

    def fail_create(self, stdin, exc):
        self._create_errors[stdin] = exc

    async def create(self, request: JobRequest) -> str:
        self.created.append(request)
        if request.stdin in self._create_errors:
            raise self._create_errors[request.stdin]
        token = f"tok-{len(self.created)}"
        self._queues[token] = list(self._scripts.get(request.stdin, []))
        return token

    async def fetch(self, token: str) -> RemoteResult:
        self.fetches.append(token)
        queue = self._queues[token]
        if not queue:
            return make_result(1, time=None, memory=None)
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_judge0():
    return FakeJudge0()


@pytest.fixture
def result_factory():
    return make_result
