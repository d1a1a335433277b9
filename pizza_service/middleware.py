"""
FastAPI middleware for the pizza service.
"""

import logging
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .logging_config import request_id_var

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Adds a unique request ID to each request for log correlation.

    The ID is taken from the client's X-Request-ID header when present,
    stored in request.state.request_id, exposed to log records through
    ``request_id_var``, and echoed in the response header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            logger.debug(
                "%s %s -> %d",
                request.method,
                request.url.path,
                response.status_code,
            )
        finally:
            request_id_var.reset(token)
        return response
