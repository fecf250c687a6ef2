"""
Q&A Forum Backend - Request ID Middleware
===========================================

What:  Assigns a correlation id to each request and returns it in the
       X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID, otherwise generates the first
       8 characters of a UUID4. The id is stored in a ContextVar (read by the
       access log and the exception handlers) and on request.state.

This is the outermost middleware. An exception that escapes every handler
below it is logged here and answered with a 500 `{"message": ...}` body, so
the error response still carries the header.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from qaforum.exceptions import UNEXPECTED_ERROR_MESSAGE

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return str(uuid.uuid4())[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request id to the request context and the response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] Unhandled error on %s %s: %s",
                rid, request.method, request.url.path, str(e), exc_info=True,
            )
            response = JSONResponse(
                status_code=500, content={"message": UNEXPECTED_ERROR_MESSAGE}
            )

        response.headers[REQUEST_ID_HEADER] = rid
        return response
