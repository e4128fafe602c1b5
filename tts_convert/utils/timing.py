"""Timing utilities for workflow steps."""

import time
from typing import Any

from tts_convert.utils.logging import get_logger

logger = get_logger("system")


class Timer:
    """
    Context manager for timing code blocks.

    Usage:
        with Timer("upload_audio", log_level="info") as t:
            await store.store(...)
        print(f"Took {t.elapsed_ms}ms")
    """

    def __init__(
        self,
        name: str = "operation",
        log: bool = True,
        log_level: str = "debug",
        **fields: Any,
    ) -> None:
        self.name = name
        self.log = log
        self.log_level = log_level.lower()
        self.fields = fields
        self.start_time: float = 0
        self.end_time: float = 0
        self.duration: float = 0
        self._running = False

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        self._running = True
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.end_time = time.perf_counter()
        self.duration = self.end_time - self.start_time
        self._running = False

        if not self.log:
            return
        log_fn = getattr(logger, self.log_level, logger.debug)
        if exc_type is not None:
            log_fn(
                f"{self.name} failed",
                duration_ms=round(self.duration * 1000, 2),
                error=str(exc_val),
                **self.fields,
            )
        else:
            log_fn(
                f"{self.name} completed",
                duration_ms=round(self.duration * 1000, 2),
                **self.fields,
            )

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if not self._running:
            return self.duration
        return time.perf_counter() - self.start_time

    @property
    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return self.elapsed * 1000
