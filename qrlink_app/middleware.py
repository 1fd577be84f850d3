"""HTTP middleware: request logging and the top-level error boundary."""

import time
import logging
from typing import Callable

from fastapi import status
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from qrlink_app.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()

        client_ip = request.client.host if request.client else "unknown"
        self.logger.info(f"Request: {request.method} {request.url.path} from {client_ip}")

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        self.logger.info(
            f"Response: {request.method} {request.url.path} - "
            f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms"
        )

        return response


class ErrorBoundaryMiddleware(BaseHTTPMiddleware):
    """
    Turns any exception that escaped the routes and exception handlers into
    a fixed 500 response. The server keeps serving other requests.
    """

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        try:
            return await call_next(request)
        except Exception:
            self.logger.exception(
                f"Unhandled error while handling {request.method} {request.url.path}"
            )
            return PlainTextResponse(
                "Internal Server Error",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
