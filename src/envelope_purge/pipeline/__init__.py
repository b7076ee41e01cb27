"""
Pipeline components for chunking, envelope building, submission and aggregation.
"""

from .aggregator import summarize
from .chunker import chunk_records
from .envelope_builder import build_delete_envelope
from .pipeline import DeletionPipeline, validate_records
from .response_parser import ResponseParseError, parse_soap_response
from .submitter import BatchSubmitter

__all__ = [
    # Main Pipeline
    'DeletionPipeline',
    'validate_records',
    # Components
    'chunk_records',
    'build_delete_envelope',
    'BatchSubmitter',
    'parse_soap_response',
    'ResponseParseError',
    'summarize',
]
