import logging
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

request_context: ContextVar[Optional[Request]] = ContextVar("request_context", default=None)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Make the current request available to code outside route handlers and tag it with an id"""

    async def dispatch(self, request: Request, call_next):
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = request_context.set(request)
        try:
            response = await call_next(request)
        finally:
            request_context.reset(token)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response


class RequestIdFilter(logging.Filter):
    """Stamp log records with the id of the request being served ("-" outside a request)"""

    def filter(self, record: logging.LogRecord) -> bool:
        request = request_context.get()
        record.request_id = getattr(request.state, "request_id", "-") if request is not None else "-"
        return True
