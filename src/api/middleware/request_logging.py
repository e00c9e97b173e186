"""
Request logging middleware.

Gives every request a correlation id (reusing an inbound ``X-Request-ID``
when present), binds it into the structlog context for the duration of the
request, and logs one ``http_request`` event per response.
"""
import time
import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = structlog.get_logger("catalog_scroll.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                self._log(request, status_code=500, start=start, level="error")
                raise

            response.headers[REQUEST_ID_HEADER] = request_id

            if response.status_code >= 500:
                level = "error"
            elif response.status_code >= 400:
                level = "warning"
            else:
                level = "info"
            self._log(request, status_code=response.status_code, start=start, level=level)
            return response
        finally:
            structlog.contextvars.clear_contextvars()

    @staticmethod
    def _log(request: Request, *, status_code: int, start: float, level: str) -> None:
        log_method = getattr(logger, level, logger.info)
        log_method(
            "http_request",
            method=request.method,
            path=request.url.path,
            query=request.url.query or None,
            status_code=status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            client_ip=request.client.host if request.client else None,
        )
