"""
Process entry point for the envelope purge service.

Owns process lifecycle only: logging setup, the last-resort exception hook,
and handing the app to uvicorn, which installs SIGINT/SIGTERM handlers and
shuts down gracefully.
"""

import sys

import structlog
import uvicorn

from envelope_purge.logging import configure_logging

from .config import get_settings

logger = structlog.get_logger(__name__)


def _log_unhandled(exc_type, exc_value, exc_traceback) -> None:
    """Log uncaught exceptions through structlog before the process exits."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logger.critical(
        "server.uncaught_exception",
        error=str(exc_value),
        error_type=exc_type.__name__,
        exc_info=(exc_type, exc_value, exc_traceback),
    )


def run() -> None:
    """Start the HTTP server."""
    settings = get_settings()
    configure_logging(json_output=settings.LOG_JSON)
    sys.excepthook = _log_unhandled

    logger.info(
        "server.starting",
        url=f"http://{settings.HOST}:{settings.PORT}",
        health=f"http://{settings.HOST}:{settings.PORT}/api/health",
    )
    uvicorn.run(
        "envelope_purge.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
