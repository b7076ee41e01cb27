"""
Tests for the record chunker.
"""

import math

import pytest

from envelope_purge.errors import InvalidInputError
from envelope_purge.pipeline.chunker import chunk_records


class TestChunkRecords:
    """Test splitting records into fixed-size batches."""

    @pytest.mark.parametrize('count,size', [(1, 1), (7, 3), (50, 50), (120, 50), (5, 10)])
    def test_chunk_sizes_and_order(self, count, size):
        """Chunks are full except possibly the last and keep input order."""
        records = list(range(count))
        chunks = chunk_records(records, size)

        assert len(chunks) == math.ceil(count / size)
        assert all(len(c) == size for c in chunks[:-1])
        assert 0 < len(chunks[-1]) <= size
        assert [item for chunk in chunks for item in chunk] == records

    def test_120_records_in_batches_of_50(self, make_records):
        chunks = chunk_records(make_records(120), 50)
        assert [len(c) for c in chunks] == [50, 50, 20]

    def test_empty_input_yields_no_chunks(self):
        assert chunk_records([], 50) == []

    @pytest.mark.parametrize('size', [0, -1, -50])
    def test_non_positive_size_rejected(self, size):
        with pytest.raises(InvalidInputError) as exc_info:
            chunk_records([1, 2, 3], size)
        assert exc_info.value.context == {'size': size}

    def test_chunks_are_independent_lists(self):
        """Mutating a chunk does not touch the source sequence."""
        records = [1, 2, 3, 4]
        chunks = chunk_records(records, 2)
        chunks[0].append(99)
        assert records == [1, 2, 3, 4]
