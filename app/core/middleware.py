"""HTTP middleware: request correlation, access logging and security checks.

Usage:
    app.middleware("http")(security_middleware)
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from urllib.parse import unquote

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging import clear_request_id, get_request_id, set_request_id

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=(), payment=()",
}

SUSPICIOUS_URL_PATTERNS = (
    re.compile(r"\.\./"),
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"data:.*base64", re.IGNORECASE),
    re.compile(r"eval\(", re.IGNORECASE),
)


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate a request id and log one line per request.

    The id comes from the configured header (``X-Request-ID``) or a new
    UUID; it is stored in contextvars for log correlation and echoed back
    together with ``X-Request-Duration-ms``.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "http.request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else None,
            },
        )
    finally:
        clear_request_id()

    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


def _reject(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, "request_id": get_request_id()}},
        headers=SECURITY_HEADERS,
    )


async def security_middleware(request: Request, call_next) -> Response:
    """Add security headers and reject suspicious or oversized requests."""

    # scope path is already percent-decoded; the query string is not
    target = request.url.path
    if request.url.query:
        target = f"{target}?{unquote(request.url.query)}"

    for pattern in SUSPICIOUS_URL_PATTERNS:
        if pattern.search(target):
            logger.warning(
                "security.blocked_request",
                extra={
                    "path": request.url.path,
                    "client_ip": request.client.host if request.client else None,
                    "user_agent": request.headers.get("user-agent"),
                },
            )
            return _reject(400, "security_violation", "Invalid request format")

    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > settings.app.max_request_bytes:
        return _reject(413, "payload_too_large", "Request too large")

    response: Response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response
