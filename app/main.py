"""FastAPI application: routers, CORS and request logging."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.Core.config import get_settings
from app.Auth.routes import router as auth_router
from app.features.judge0.endpoints import public_router as judge0_public_router
from app.features.judge0.endpoints import protected_router as judge0_protected_router
from app.features.submissions.endpoints import router as submissions_router
from app.features.submissions.repository import submissions_repository

_settings = get_settings()

logging.basicConfig(
    level=getattr(logging, _settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=_settings.app_name)

if _settings.problems_file:
    submissions_repository.load_problems(_settings.problems_file)


# ------------------------
# CORS Setup
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=[_settings.frontend_url],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    incoming = request.headers.get("X-Request-Id") or request.headers.get("X-Request-ID")
    req_id = incoming or str(uuid.uuid4())
    request.state.request_id = req_id
    logger = logging.getLogger("request")
    logger.info("request.start", extra={"request_id": req_id, "path": request.url.path, "method": request.method})
    response = await call_next(request)
    response.headers["X-Request-Id"] = req_id
    logger.info("request.end", extra={"request_id": req_id, "path": request.url.path, "status_code": response.status_code})
    return response


# ------------------------
# Routers
# ------------------------
app.include_router(auth_router)
app.include_router(judge0_public_router)
app.include_router(submissions_router)
app.include_router(judge0_protected_router)


@app.get("/health")
async def health():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}
