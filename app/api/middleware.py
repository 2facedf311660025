"""
API middleware components.

Assigns every request an id for log correlation and records an access log line.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that sets a request ID for correlation in logs and echoes it in the response.

    A client supplied ``X-Request-ID`` is reused so ids can be traced across services.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        start_time = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            logger.bind(
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                client_host=request.client.host if request.client else None,
            ).info(f"{request.method} {request.url.path} -> {response.status_code}")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
