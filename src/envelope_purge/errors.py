"""
Custom exceptions and error handling for the envelope purge pipeline.

Provides:
- Typed exception hierarchy for the failure modes of a deletion run
- Error context preservation for debugging
- Classification of httpx transport failures into fatal batch errors
"""

from typing import Any

import httpx


class EnvelopePurgeError(Exception):
    """Base exception for all envelope purge errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Input Errors
# =============================================================================


class InvalidInputError(EnvelopePurgeError):
    """Caller data is missing or malformed; no batches are attempted."""

    pass


# =============================================================================
# Batch Errors
# =============================================================================


class BatchError(EnvelopePurgeError):
    """
    Base class for errors raised while submitting a single batch.

    ``code`` is the stable taxonomy name reported in batch results.
    ``fatal`` errors abort the remainder of the run.
    """

    code: str = 'BatchError'
    fatal: bool = False

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        batch: int | None = None,
    ):
        super().__init__(message, context)
        self.batch = batch


class RemoteTimeoutError(BatchError):
    """The remote call exceeded the configured deadline."""

    code = 'Timeout'
    fatal = True


class ServiceUnavailableError(BatchError):
    """The transport could not reach the remote endpoint."""

    code = 'ServiceUnavailable'
    fatal = True


class RemoteError(BatchError):
    """The remote service answered with a non-success HTTP status."""

    code = 'RemoteError'

    def __init__(
        self,
        message: str,
        status_code: int,
        reason: str = '',
        body: str | None = None,
        context: dict[str, Any] | None = None,
        batch: int | None = None,
    ):
        super().__init__(message, context, batch)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class ResponseReadError(BatchError):
    """The response body could not be read after a status was received."""

    code = 'ResponseReadFailure'


# =============================================================================
# Error Handling Utilities
# =============================================================================


def wrap_httpx_error(exc: Exception, context: dict[str, Any] | None = None) -> BatchError:
    """
    Wrap an httpx transport exception in our typed error hierarchy.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        RemoteTimeoutError for timeouts, ServiceUnavailableError for any
        other transport failure
    """
    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    if isinstance(exc, httpx.TimeoutException):
        return RemoteTimeoutError(
            f"Request to document service timed out: {exc}",
            context=ctx,
        )
    return ServiceUnavailableError(
        f"Cannot connect to document service: {exc}",
        context=ctx,
    )
