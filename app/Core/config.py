from __future__ import annotations

import os
from functools import lru_cache
from dotenv import load_dotenv, find_dotenv

_env_path = find_dotenv(".env") or ".env"
load_dotenv(_env_path, override=False)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class Settings:
    """Central configuration (env driven)."""

    def __init__(self) -> None:
        # Judge0 / external
        self.judge0_api_url: str = os.getenv("JUDGE0_API_URL", "").strip().rstrip("/")
        self.judge0_api_key: str = os.getenv("JUDGE0_KEY", "")
        self.judge0_host: str = os.getenv("JUDGE0_HOST", "")
        self.judge0_http_timeout_s: float = _env_float("JUDGE0_HTTP_TIMEOUT_S", 10.0)
        # Polling limits
        self.poll_interval_s: float = _env_float("POLL_INTERVAL_S", 1.0)
        self.test_case_timeout_s: float = _env_float("TEST_CASE_TIMEOUT_S", 6.0)
        self.max_polling_attempts: int = _env_int("MAX_POLLING_ATTEMPTS", 6)
        self.run_max_attempts: int = _env_int("RUN_MAX_ATTEMPTS", 10)
        self.run_timeout_s: float = _env_float("RUN_TIMEOUT_S", 10.0)
        # Auth
        self.jwt_secret: str = os.getenv("JWT_SECRET", "your-secret-key")
        self.jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
        # App meta
        self.app_name: str = "Code Grader"
        self.frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:3000").rstrip("/")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.debug: bool = os.getenv("DEBUG", "False").lower() == "true"
        # Problems seed file (JSON list of problems with test cases)
        self.problems_file: str = os.getenv("PROBLEMS_FILE", "")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
