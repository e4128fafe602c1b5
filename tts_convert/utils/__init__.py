"""Utility modules."""

from tts_convert.utils.logging import (
    ContextLogger,
    LogContext,
    get_log_context,
    get_logger,
    set_log_context,
    setup_logging,
)
from tts_convert.utils.timing import Timer

__all__ = [
    "ContextLogger",
    "LogContext",
    "get_log_context",
    "get_logger",
    "set_log_context",
    "setup_logging",
    "Timer",
]
