"""
Tests for the logging module.
"""

import io
import logging
import sys
import time

import structlog

from envelope_purge.logging import (
    PipelineTimer,
    configure_logging,
    get_context_id,
    get_run_id,
    logging_context,
)


class TestLoggingContext:
    """Test logging context management."""

    def test_logging_context_sets_values(self):
        with logging_context(run_id='run_123', context_id='ctx_abc'):
            assert get_run_id() == 'run_123'
            assert get_context_id() == 'ctx_abc'

    def test_logging_context_restores_values(self):
        with logging_context(run_id='outer'):
            assert get_run_id() == 'outer'

            with logging_context(run_id='inner'):
                assert get_run_id() == 'inner'

            assert get_run_id() == 'outer'

        assert get_run_id() is None

    def test_context_merged_into_events(self):
        with logging_context(run_id='run_1', context_id='ctx_1'):
            event = structlog.contextvars.merge_contextvars(
                None, 'info', {'event': 'pipeline.started'}
            )
        assert event == {'event': 'pipeline.started', 'run_id': 'run_1', 'context_id': 'ctx_1'}

    def test_no_context_outside_block(self):
        with logging_context(run_id='run_1'):
            pass
        event = structlog.contextvars.merge_contextvars(None, 'info', {'event': 'x'})
        assert event == {'event': 'x'}


class TestConfigureLogging:
    """Test where log output goes."""

    def test_logs_written_to_given_stream(self):
        buffer = io.StringIO()
        try:
            configure_logging(json_output=True, stream=buffer)
            structlog.get_logger('script').info('purge.loaded', rows=3)
            logging.getLogger('httpx').warning('HTTP Request: POST')
        finally:
            configure_logging(json_output=False, stream=sys.stdout)

        output = buffer.getvalue()
        assert '"event": "purge.loaded"' in output
        assert 'HTTP Request: POST' in output


class TestPipelineTimer:
    """Test pipeline timing functionality."""

    def test_timer_records_stages(self):
        timer = PipelineTimer()

        with timer.stage('batch_1'):
            time.sleep(0.01)
        with timer.stage('batch_2'):
            pass

        summary = timer.summary()
        assert set(summary['stages']) == {'batch_1', 'batch_2'}
        assert summary['stages']['batch_1'] >= 5
        assert summary['total_ms'] >= summary['stages']['batch_1']
