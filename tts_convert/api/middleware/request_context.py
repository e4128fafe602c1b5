"""Request context middleware for tracking requests.

Provides:
- Extracts or generates X-Request-ID header
- Sets up logging context for the request (request_id, user_id)
- Adds request_id and duration to response headers
"""

import time
import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from tts_convert.utils.logging import LogContext, get_logger, set_log_context

logger = get_logger("api")

_request_context: ContextVar["RequestContext | None"] = ContextVar(
    "request_context", default=None
)


@dataclass
class RequestContext:
    """Context data for the current request."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    start_time: float = field(default_factory=time.perf_counter)
    method: str = ""
    path: str = ""
    client_ip: str | None = None
    user_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000

    def set_user(self, user_id: str) -> None:
        """Set the user ID for this request."""
        self.user_id = user_id
        set_log_context(user_id=user_id)


def get_request_context() -> RequestContext | None:
    """Get the current request context."""
    return _request_context.get()


def set_request_user(user_id: str | None) -> None:
    """Attach the user of the current request to its logging context."""
    ctx = get_request_context()
    if ctx and user_id:
        ctx.set_user(user_id)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware to set up request context for each request.

    1. Extracts or generates X-Request-ID
    2. Sets request_id in the logging context for all log messages
    3. Adds X-Request-ID and X-Request-Duration-Ms to the response
    4. Logs request completion with timing
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        context = RequestContext(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request),
        )
        context_token = _request_context.set(context)

        with LogContext(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            logger.debug("Request started", client_ip=context.client_ip)

            try:
                response = await call_next(request)

                response.headers["X-Request-ID"] = request_id
                response.headers["X-Request-Duration-Ms"] = f"{context.elapsed_ms:.2f}"

                logger.info(
                    "Request completed",
                    status_code=response.status_code,
                    duration_ms=round(context.elapsed_ms, 2),
                )
                return response

            except Exception as exc:
                logger.error(
                    "Request failed with exception",
                    error_type=type(exc).__name__,
                    duration_ms=round(context.elapsed_ms, 2),
                )
                raise

            finally:
                _request_context.reset(context_token)

    def _get_client_ip(self, request: Request) -> str | None:
        """Extract client IP from request, handling proxies."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return None
