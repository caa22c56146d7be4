"""Correlation id middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from lib.common.correlation import LOG_ID_HEADER, accept_log_id, set_log_id, reset_log_id


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a LogId to each request and echo it in the ``X-Log-Id`` header."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Process request under its correlation id."""
        log_id = accept_log_id(request.headers.get(LOG_ID_HEADER))
        request.state.log_id = log_id
        token = set_log_id(log_id)
        try:
            response = await call_next(request)
        finally:
            reset_log_id(token)

        response.headers[LOG_ID_HEADER] = log_id
        return response
