"""Roll per-batch results up into a RunSummary."""

from typing import Sequence

from ..errors import BatchError
from ..models.results import BatchResult, RunSummary


def summarize(
    results: Sequence[BatchResult],
    total_batches: int,
    total_items: int,
    abort_error: BatchError | None = None,
    processing_time_ms: int | None = None,
) -> RunSummary:
    """
    Build the run summary from results in submission order.

    Args:
        results: One result per attempted batch
        total_batches: Number of chunks the input was split into
        total_items: Number of records in the input
        abort_error: Fatal error that stopped the run early, if any
        processing_time_ms: Wall-clock duration of the run

    Returns:
        RunSummary with the fatal abort flag set when abort_error is given
    """
    if len(results) > total_batches:
        raise ValueError(
            f'{len(results)} results recorded for {total_batches} batches'
        )

    summary = RunSummary(
        total_batches=total_batches,
        total_items=total_items,
        results=list(results),
        processing_time_ms=processing_time_ms,
    )
    if abort_error is not None:
        summary.aborted = True
        summary.abort_reason = abort_error.code
        summary.aborted_batch = abort_error.batch
    return summary
