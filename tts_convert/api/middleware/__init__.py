"""API middleware components."""

from tts_convert.api.middleware.error_handler import (
    build_generic_exception_handler,
    conversion_exception_handler,
    http_exception_handler,
    register_exception_handlers,
    validation_exception_handler,
)
from tts_convert.api.middleware.request_context import (
    RequestContext,
    RequestContextMiddleware,
    get_request_context,
    set_request_user,
)

__all__ = [
    "register_exception_handlers",
    "conversion_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "build_generic_exception_handler",
    "RequestContext",
    "RequestContextMiddleware",
    "get_request_context",
    "set_request_user",
]
