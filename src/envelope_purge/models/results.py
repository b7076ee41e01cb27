"""
Result models for batch submissions and whole deletion runs.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BatchResult:
    """
    Outcome of submitting one batch to the document service.

    Successful batches carry the HTTP status, raw body and the parsed body
    (``None`` when the body was not valid XML). Failed batches carry the
    error message and its taxonomy code.
    """

    batch: int
    item_count: int
    success: bool

    # Success fields
    status: int | None = None
    raw_response: str | None = None
    parsed_response: dict[str, Any] | str | None = None

    # Failure fields
    error: str | None = None
    error_code: str | None = None
    details: str | None = None

    @classmethod
    def succeeded(
        cls,
        batch: int,
        item_count: int,
        status: int,
        raw_response: str,
        parsed_response: dict[str, Any] | str | None,
    ) -> 'BatchResult':
        return cls(
            batch=batch,
            item_count=item_count,
            success=True,
            status=status,
            raw_response=raw_response,
            parsed_response=parsed_response,
        )

    @classmethod
    def failed(
        cls,
        batch: int,
        item_count: int,
        error: str,
        error_code: str,
        status: int | None = None,
        details: str | None = None,
    ) -> 'BatchResult':
        return cls(
            batch=batch,
            item_count=item_count,
            success=False,
            status=status,
            error=error,
            error_code=error_code,
            details=details,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if self.success:
            return {
                'batch': self.batch,
                'status': self.status,
                'rawResponse': self.raw_response,
                'parsedResponse': self.parsed_response,
                'itemCount': self.item_count,
                'success': True,
            }
        return {
            'batch': self.batch,
            'status': self.status if self.status is not None else 'error',
            'error': self.error,
            'errorCode': self.error_code,
            'details': self.details,
            'itemCount': self.item_count,
            'success': False,
        }


@dataclass
class RunSummary:
    """Aggregate of every batch attempted during one deletion run."""

    total_batches: int
    total_items: int
    results: list[BatchResult] = field(default_factory=list)

    # Fatal abort tracking
    aborted: bool = False
    abort_reason: str | None = None
    aborted_batch: int | None = None

    processing_time_ms: int | None = None

    @property
    def successful_batches(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def success(self) -> bool:
        """True if at least one batch succeeded."""
        return self.successful_batches > 0

    @property
    def attempted_items(self) -> int:
        return sum(r.item_count for r in self.results)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'success': self.success,
            'totalBatches': self.total_batches,
            'totalItems': self.total_items,
            'successfulBatches': self.successful_batches,
            'aborted': self.aborted,
            'abortReason': self.abort_reason,
            'abortedBatch': self.aborted_batch,
            'processingTimeMs': self.processing_time_ms,
            'results': [r.to_dict() for r in self.results],
        }
