from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Any, Dict, Optional

import httpx

from app.Core.config import Settings, get_settings
from .errors import RemotePollError, RemoteSubmissionError
from .schemas import JobRequest, RemoteResult

logger = logging.getLogger(__name__)

_NON_B64 = re.compile(r"[^A-Za-z0-9+/]")


def decode_field(value: Any) -> Optional[str]:
    """Decode one base64 text field from Judge0.

    Blank or missing values decode to ``None``. Judge0 wraps its base64 output
    at 60 columns and occasionally trims padding, so the payload is cleaned and
    re-padded first; if it still is not base64 the raw text is returned.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    cleaned = _NON_B64.sub("", value)
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        raw = base64.b64decode(cleaned)
    except (binascii.Error, ValueError):
        return value
    return raw.decode("utf-8", errors="replace")


def _mask_headers(h: dict) -> dict:
    masked = {}
    for k, v in (h or {}).items():
        if k.lower() in ("x-rapidapi-key",):
            masked[k] = "[REDACTED]"
        else:
            masked[k] = v
    return masked


class Judge0Client:
    """Stateless wrapper around the Judge0 submissions endpoint.

    ``settings.judge0_api_url`` points at the submissions collection itself
    (e.g. ``http://judge0:2358/submissions``): jobs are created by POSTing to it
    and fetched from ``{url}/{token}``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.base_url = (self.settings.judge0_api_url or "").rstrip("/")
        self.headers = {"Accept": "*/*", "Content-Type": "application/json"}
        if self.settings.judge0_api_key and self.settings.judge0_host:
            self.headers.update({
                "X-RapidAPI-Key": self.settings.judge0_api_key,
                "X-RapidAPI-Host": self.settings.judge0_host,
            })
        self._transport = transport

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        logger.debug("Judge0 request: %s %s headers=%s", method, url, _mask_headers(self.headers))
        timeout = httpx.Timeout(self.settings.judge0_http_timeout_s, connect=3.0)
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            return await client.request(method, url, headers=self.headers, **kwargs)

    async def create(self, request: JobRequest) -> str:
        """Create a Judge0 job and return its token."""
        if not self.base_url:
            raise RemoteSubmissionError("Judge0 base URL is not configured (JUDGE0_API_URL).")
        try:
            response = await self._request("POST", self.base_url, json=request.model_dump())
        except httpx.HTTPError as exc:
            logger.warning("Judge0 create failed: %s", exc)
            raise RemoteSubmissionError(f"Failed to connect to Judge0 at {self.base_url}: {exc}") from exc
        if not 200 <= response.status_code < 300:
            logger.warning("Judge0 create rejected: status=%s body=%s", response.status_code, response.text[:300])
            raise RemoteSubmissionError(f"Failed to submit code: {response.status_code} - {response.text[:200]}")
        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteSubmissionError(f"Failed to parse Judge0 response: {response.text[:200]}") from exc
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise RemoteSubmissionError("Judge0 response missing token")
        logger.debug("Judge0 job created token=%s", token)
        return token

    async def fetch(self, token: str) -> RemoteResult:
        """Fetch a job snapshot with base64 payloads decoded."""
        if not token:
            raise RemotePollError("Invalid submission token.")
        if not self.base_url:
            raise RemotePollError("Judge0 base URL is not configured (JUDGE0_API_URL).")
        try:
            response = await self._request(
                "GET",
                f"{self.base_url}/{token}",
                params={"base64_encoded": "true"},
            )
        except httpx.HTTPError as exc:
            raise RemotePollError(f"Failed to fetch submission {token}: {exc}") from exc
        if not 200 <= response.status_code < 300:
            raise RemotePollError(f"Failed to get result: {response.status_code} body={response.text[:200]}")
        try:
            data = response.json()
        except ValueError as exc:
            raise RemotePollError(f"Failed to parse result for {token}: {response.text[:200]}") from exc
        if not isinstance(data, dict):
            raise RemotePollError(f"Unexpected result payload for {token}")
        return self._to_remote_result(token, data)

    @staticmethod
    def _to_remote_result(token: str, data: Dict[str, Any]) -> RemoteResult:
        status = data.get("status") if isinstance(data.get("status"), dict) else {}
        status_id = status.get("id", data.get("status_id"))
        try:
            status_id = int(status_id) if status_id is not None else None
        except (TypeError, ValueError):
            status_id = None
        memory = data.get("memory")
        time_val = data.get("time")
        return RemoteResult(
            token=data.get("token") or token,
            status_id=status_id,
            status_description=status.get("description") or data.get("status_description"),
            stdout=data.get("stdout"),
            stderr=data.get("stderr"),
            compile_output=data.get("compile_output"),
            message=data.get("message"),
            time=str(time_val) if time_val is not None else None,
            memory=int(memory) if isinstance(memory, (int, float)) else None,
            decoded_stdout=decode_field(data.get("stdout")),
            decoded_stderr=decode_field(data.get("stderr")),
            decoded_compile_output=decode_field(data.get("compile_output")),
            decoded_message=decode_field(data.get("message")),
        )
