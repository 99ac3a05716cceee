"""Request id middleware for the HTTP facades.

Provides request ID generation and logging for all HTTP requests. The request
ID is attached to ``request.state.work_context`` for handlers to pass on.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging_config import get_logger
from .work_context import WorkContext, generate_request_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADER = "X-Correlation-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse or mint an X-Request-ID and log the request around the handler."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Run the handler with a WorkContext on request.state.

        Args:
            request: Incoming request
            call_next: Downstream ASGI app

        Returns:
            Response: The handler response, with X-Request-ID set
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        context = WorkContext(
            request_id=request_id,
            correlation_id=request.headers.get(CORRELATION_HEADER),
        )
        request.state.work_context = context

        start_time = time.time()
        logger.info(f"{request.method} {request.url.path}", extra=context.log_extra())

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed after {duration_ms:.2f}ms: {e}",
                extra=context.log_extra(),
                exc_info=True,
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Request completed: {response.status_code} in {duration_ms:.2f}ms",
            extra=context.log_extra(),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
