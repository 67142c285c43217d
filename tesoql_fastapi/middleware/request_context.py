"""Request ID and access-log middleware."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("tesoql.http")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ``X-Request-ID`` and log it.

    Usage:
        app.add_middleware(RequestContextMiddleware, log_requests=True)
    """

    def __init__(self, app: Callable, log_requests: bool = True):
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        t0 = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        if self.log_requests:
            logger.info(
                "%s %s status=%d ms=%.1f request_id=%s",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - t0) * 1000,
                request_id,
            )
        return response


def parse_cors_origins(origins_string: str) -> list[str]:
    """Parse CORS origins from comma-separated string.

    Example:
        >>> parse_cors_origins("https://app1.com, https://app2.com")
        ["https://app1.com", "https://app2.com"]

        >>> parse_cors_origins("*")
        ["*"]
    """
    if origins_string == "*":
        return ["*"]

    return [origin.strip() for origin in origins_string.split(",") if origin.strip()]
