"""
Envelope Purge

Bulk deletion of DocumentNOW envelopes: uploaded spreadsheet rows are split
into batches and submitted sequentially as DeleteEnvelope SOAP requests.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline import (
    DeletionPipeline,
    BatchSubmitter,
    build_delete_envelope,
    chunk_records,
    parse_soap_response,
    summarize,
)
from .clients import DocumentServiceClient
from .models import BatchResult, DeletionRecord, RunSummary
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    PipelineTimer,
)
from .errors import (
    EnvelopePurgeError,
    InvalidInputError,
    BatchError,
    RemoteTimeoutError,
    ServiceUnavailableError,
    RemoteError,
    ResponseReadError,
)

__all__ = [
    # Version
    '__version__',
    # Main Pipeline
    'DeletionPipeline',
    # Components
    'BatchSubmitter',
    'build_delete_envelope',
    'chunk_records',
    'parse_soap_response',
    'summarize',
    # Clients
    'DocumentServiceClient',
    # Models
    'BatchResult',
    'DeletionRecord',
    'RunSummary',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'PipelineTimer',
    # Errors
    'EnvelopePurgeError',
    'InvalidInputError',
    'BatchError',
    'RemoteTimeoutError',
    'ServiceUnavailableError',
    'RemoteError',
    'ResponseReadError',
]
