"""Logging utilities for speechbubble."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class RenderStats:
    """Statistics from a batch render run."""

    processed_count: int = 0
    error_count: int = 0
    truncated_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_ms(self) -> float:
        if not self.timings_ms:
            return 0.0
        return sum(self.timings_ms) / len(self.timings_ms)

    @property
    def min_ms(self) -> float:
        return min(self.timings_ms, default=0.0)

    @property
    def max_ms(self) -> float:
        return max(self.timings_ms, default=0.0)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging over the stdlib root logger.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces handlers installed by an earlier call
    for handler in list(root_logger.handlers):
        if getattr(handler, "_speechbubble", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._speechbubble = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler._speechbubble = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("speechbubble")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class RenderLogger:
    """Logger for tracking batch render progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_bubble_start(self, bubble_id: str) -> None:
        """Log start of bubble rendering."""
        self._logger.debug("Rendering bubble", bubble=bubble_id)

    def log_bubble_complete(
        self,
        bubble_id: str,
        line_count: int,
        truncated: bool,
        duration_ms: float,
    ) -> None:
        """Log successful bubble render."""
        self._logger.info(
            "Bubble rendered",
            bubble=bubble_id,
            lines=line_count,
            truncated=truncated,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.timings_ms.append(duration_ms)
        if truncated:
            self.log_truncation(bubble_id)

    def log_truncation(self, bubble_id: str) -> None:
        """Log text that did not fit its bubble."""
        self._logger.warning("Bubble text truncated", bubble=bubble_id)
        self._stats.truncated_count += 1

    def log_bubble_error(
        self,
        bubble_id: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log bubble render error."""
        self._logger.error(
            "Bubble rendering failed",
            bubble=bubble_id,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((bubble_id, str(error)))

    @property
    def stats(self) -> RenderStats:
        """Get current render statistics."""
        return self._stats
