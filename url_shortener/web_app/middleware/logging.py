"""Request logging middleware."""

import time
import logging
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from lib.common.logging_config import log_event


class LoggingMiddleware(BaseHTTPMiddleware):
    """One access line per request, tagged with the request's LogId.

    Runs inside CorrelationMiddleware, so the LogId is already bound.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None, service: str = "url-shortener"):
        super().__init__(app)
        self.logger = logger or logging.getLogger("url_shortener.http")
        self.service = service

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        if response.status_code >= 500:
            level = "error"
        elif response.status_code >= 400:
            level = "warning"
        else:
            level = "info"

        log_event(
            self.logger,
            f"{request.method} {request.url.path}",
            level,
            f"{response.status_code} in {duration_ms:.2f}ms",
            service=self.service,
            client=client_ip,
            status=response.status_code,
            durationMs=duration_ms,
        )

        return response
