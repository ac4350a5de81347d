"""Custom middleware for request processing."""

import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from pinboard.core.logging import request_id_var

logger = logging.getLogger("pinboard.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging and request ID injection.

    Reuses an incoming ``X-Request-ID`` header when the caller sends one,
    otherwise generates a new id.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        """Process the request and add logging."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            start_time = time.perf_counter()
            response: Response = await call_next(request)
            process_time = (time.perf_counter() - start_time) * 1000  # ms

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time-Ms"] = f"{process_time:.2f}"

            logger.info(
                "%s %s %s",
                request.method,
                request.url.path,
                response.status_code,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "process_time_ms": round(process_time, 2),
                    "client_ip": request.client.host if request.client else None,
                },
            )
            return response
        finally:
            request_id_var.reset(token)
