"""Structured logging utilities and middleware for FastAPI."""

import json
import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from hamcall.config import get_settings


LOG = logging.getLogger("hamcall")
if not LOG.hasHandlers():
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(formatter)
    LOG.addHandler(handler)
LOG.setLevel(get_settings().log_level)


def log_debug(event: str, **kwargs: object) -> None:
    """Log a debug event as structured JSON."""
    if not LOG.isEnabledFor(logging.DEBUG):
        return
    log = {"level": "debug", "event": event, **kwargs}
    LOG.debug(json.dumps(log, default=str))


def log_info(event: str, **kwargs: object) -> None:
    """Log an informational event as structured JSON."""
    log = {"level": "info", "event": event, **kwargs}
    LOG.info(json.dumps(log, default=str))


def log_warning(event: str, **kwargs: object) -> None:
    """Log a warning event as structured JSON."""
    log = {"level": "warning", "event": event, **kwargs}
    LOG.warning(json.dumps(log, default=str))


def log_error(event: str, **kwargs: object) -> None:
    """Log an error event as structured JSON."""
    log = {"level": "error", "event": event, **kwargs}
    LOG.error(json.dumps(log, default=str))


def _redact_headers(headers: dict) -> dict:
    """Redact sensitive headers such as API keys."""
    redacted = {}
    for k, v in headers.items():
        if k.lower() in ("authorization", "x-api-key"):
            redacted[k] = "<redacted>"
        else:
            redacted[k] = v
    return redacted


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Structured HTTP request logging middleware."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log the request and response in structured JSON format."""
        rid = request.headers.get("x-request-id", str(uuid.uuid4()))
        start = time.time()

        response = await call_next(request)

        dur_ms = int((time.time() - start) * 1000)
        log_info(
            "http_request",
            request_id=rid,
            method=request.method,
            path=request.url.path,
            query=dict(request.query_params),
            headers=_redact_headers(dict(request.headers)),
            status=response.status_code,
            duration_ms=dur_ms,
        )
        response.headers["x-request-id"] = rid
        return response
