"""
Tests for input records and result models.
"""

import pytest
from pydantic import ValidationError

from envelope_purge.models import BatchResult, DeletionRecord, RunSummary


class TestDeletionRecord:
    def test_trims_and_ignores_extra_columns(self):
        record = DeletionRecord.model_validate(
            {'EnvelopeId': ' E1 ', 'AuthToken': '\tT1\n', 'Signer': 'someone@example.com'}
        )
        assert record.envelope_id == 'E1'
        assert record.auth_token == 'T1'

    def test_numeric_cells_become_strings(self):
        record = DeletionRecord.model_validate({'EnvelopeId': 12345, 'AuthToken': 678})
        assert record.envelope_id == '12345'
        assert record.auth_token == '678'

    @pytest.mark.parametrize(
        'row',
        [
            {'EnvelopeId': 'E1'},
            {'AuthToken': 'T1'},
            {'EnvelopeId': '', 'AuthToken': 'T1'},
            {'EnvelopeId': 'E1', 'AuthToken': '   '},
            {'EnvelopeId': None, 'AuthToken': 'T1'},
        ],
    )
    def test_missing_or_blank_fields_rejected(self, row):
        with pytest.raises(ValidationError):
            DeletionRecord.model_validate(row)


class TestResultSerialization:
    def test_success_result_dict(self):
        result = BatchResult.succeeded(
            batch=1, item_count=50, status=200, raw_response='<ok/>', parsed_response=''
        )
        assert result.to_dict() == {
            'batch': 1,
            'status': 200,
            'rawResponse': '<ok/>',
            'parsedResponse': '',
            'itemCount': 50,
            'success': True,
        }

    def test_failure_without_status_reports_error(self):
        result = BatchResult.failed(batch=2, item_count=5, error='refused', error_code='ServiceUnavailable')
        data = result.to_dict()
        assert data['status'] == 'error'
        assert data['errorCode'] == 'ServiceUnavailable'
        assert data['success'] is False

    def test_summary_counts(self):
        summary = RunSummary(
            total_batches=3,
            total_items=7,
            results=[
                BatchResult.succeeded(1, 3, 200, '<ok/>', None),
                BatchResult.failed(2, 3, 'boom', 'RemoteError', status=500),
                BatchResult.succeeded(3, 1, 200, '<ok/>', None),
            ],
        )
        assert summary.successful_batches == 2
        assert summary.attempted_items == 7
        assert summary.success is True

        data = summary.to_dict()
        assert data['totalBatches'] == 3
        assert data['totalItems'] == 7
        assert data['successfulBatches'] == 2
        assert data['aborted'] is False
        assert len(data['results']) == 3
