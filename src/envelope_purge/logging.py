"""
Structured logging configuration for the envelope purge pipeline.

Uses structlog for structured, context-aware logging with:
- JSON output for production
- Pretty console output for development
- Automatic timing context
- Run ID and context identifier propagation across a deletion run
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Generator, TextIO

import structlog
from structlog.types import Processor

from .config import config


def get_run_id() -> str | None:
    """Get the current run ID from context."""
    return structlog.contextvars.get_contextvars().get('run_id')


def get_context_id() -> str | None:
    """Get the current provider context identifier from context."""
    return structlog.contextvars.get_contextvars().get('context_id')


def configure_logging(
    json_output: bool = False,
    log_level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structlog for the application.

    Args:
        json_output: If True, output JSON logs (for production).
                    If False, output pretty console logs (for development).
        log_level: Override log level (defaults to config.LOG_LEVEL)
        stream: Where log lines are written (defaults to stdout). Commands
                that print results on stdout pass sys.stderr.
    """
    level = log_level or config.LOG_LEVEL
    level_num = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format='%(message)s',
        stream=stream or sys.stdout,
        level=level_num,
        # An explicit stream replaces the handler installed at import
        force=stream is not None,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    run_id: str | None = None,
    context_id: str | None = None,
) -> Generator[None, None, None]:
    """
    Bind run-scoped values into structlog's context variables.

    merge_contextvars adds them to every log entry; the previous values
    are restored on exit.

    Usage:
        with logging_context(run_id="abc123", context_id="ctx_1"):
            logger.info("pipeline.started")  # Includes run_id and context_id
    """
    bound = {
        key: value
        for key, value in (('run_id', run_id), ('context_id', context_id))
        if value is not None
    }
    with structlog.contextvars.bound_contextvars(**bound):
        yield


class PipelineTimer:
    """
    Timer for tracking pipeline stage durations.

    Usage:
        timer = PipelineTimer()
        with timer.stage("batch_1"):
            # submit batch
        print(timer.summary())
    """

    def __init__(self):
        self.stages: dict[str, float] = {}
        self.start_time: float = time.perf_counter()
        self._current_stage: str | None = None
        self._stage_start: float | None = None

    @contextmanager
    def stage(self, name: str) -> Generator[None, None, None]:
        """Time a pipeline stage."""
        self._current_stage = name
        self._stage_start = time.perf_counter()
        try:
            yield
        finally:
            if self._stage_start is not None:
                elapsed = time.perf_counter() - self._stage_start
                self.stages[name] = elapsed * 1000  # Convert to ms
            self._current_stage = None
            self._stage_start = None

    @property
    def total_ms(self) -> float:
        """Total elapsed time since timer creation in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get timing summary as a dictionary."""
        return {
            'total_ms': round(self.total_ms, 2),
            'stages': {k: round(v, 2) for k, v in self.stages.items()},
        }


# Initialize logging on module import (development mode by default)
# Production deployments should call configure_logging(json_output=True)
configure_logging(json_output=False)
