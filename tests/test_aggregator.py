"""
Tests for run summary aggregation.
"""

import pytest

from envelope_purge.errors import RemoteTimeoutError
from envelope_purge.models.results import BatchResult
from envelope_purge.pipeline.aggregator import summarize


class TestSummarize:
    def test_complete_run(self):
        results = [BatchResult.succeeded(i, 10, 200, '<ok/>', None) for i in (1, 2)]
        summary = summarize(results, total_batches=2, total_items=20, processing_time_ms=12)

        assert summary.success is True
        assert summary.successful_batches == 2
        assert summary.aborted is False
        assert summary.abort_reason is None
        assert summary.processing_time_ms == 12

    def test_no_results_is_not_success(self):
        summary = summarize([], total_batches=0, total_items=0)
        assert summary.success is False
        assert summary.successful_batches == 0

    def test_abort_flags(self):
        error = RemoteTimeoutError('too slow', batch=2)
        results = [
            BatchResult.succeeded(1, 1, 200, '<ok/>', None),
            BatchResult.failed(2, 1, 'too slow', 'Timeout'),
        ]
        summary = summarize(results, total_batches=3, total_items=3, abort_error=error)

        assert summary.aborted is True
        assert summary.abort_reason == 'Timeout'
        assert summary.aborted_batch == 2
        assert len(summary.results) < summary.total_batches

    def test_more_results_than_batches_rejected(self):
        results = [BatchResult.succeeded(i, 1, 200, '', None) for i in (1, 2)]
        with pytest.raises(ValueError):
            summarize(results, total_batches=1, total_items=1)
