"""
Batch submission: one SOAP request per chunk, one BatchResult per attempt.

Non-fatal failures (remote error status, unreadable body, anything
unexpected) are captured into a failed BatchResult. Fatal transport
failures (timeout, service unavailable) propagate so the driver can abort
the run.
"""

from ..clients.soap_client import DocumentServiceClient
from ..errors import BatchError, RemoteError
from ..logging import get_logger
from ..models.results import BatchResult
from .response_parser import ResponseParseError, parse_soap_response

logger = get_logger(__name__)

# Length of the response preview written to the log
PREVIEW_CHARS = 200


class BatchSubmitter:
    """
    Submits serialized delete requests and classifies the outcome.

    Usage:
        submitter = BatchSubmitter(client)
        result = await submitter.submit(xml_body, batch=1, item_count=50)
    """

    def __init__(self, client: DocumentServiceClient):
        self.client = client

    async def submit(self, xml_body: str, batch: int, item_count: int) -> BatchResult:
        """
        Send one batch and build its result.

        Args:
            xml_body: SOAP request for the batch
            batch: 1-based batch index
            item_count: Number of records in the batch

        Returns:
            BatchResult (success or failure)

        Raises:
            RemoteTimeoutError: The request exceeded its deadline
            ServiceUnavailableError: The endpoint could not be reached
        """
        log = logger.bind(batch=batch, item_count=item_count)

        try:
            response = await self.client.post_envelope(xml_body)
        except BatchError as e:
            e.batch = batch
            if e.fatal:
                log.error('submitter.fatal_error', error=e.message, error_code=e.code)
                raise
            if isinstance(e, RemoteError):
                log.error(
                    'submitter.remote_error',
                    status_code=e.status_code,
                    reason=e.reason,
                    body=e.body,
                )
                return BatchResult.failed(
                    batch=batch,
                    item_count=item_count,
                    error=e.message,
                    error_code=e.code,
                    status=e.status_code,
                    details=e.body,
                )
            log.error('submitter.batch_failed', error=e.message, error_code=e.code)
            return BatchResult.failed(
                batch=batch,
                item_count=item_count,
                error=e.message,
                error_code=e.code,
            )
        except Exception as e:
            log.exception('submitter.unexpected_error', error_type=type(e).__name__)
            return BatchResult.failed(
                batch=batch,
                item_count=item_count,
                error=str(e),
                error_code=type(e).__name__,
            )

        log.info(
            'submitter.batch_accepted',
            status_code=response.status_code,
            preview=response.text[:PREVIEW_CHARS],
        )

        parsed = None
        try:
            # Raw bytes so the declared encoding is honored
            parsed = parse_soap_response(response.content or response.text)
        except ResponseParseError as e:
            # Not critical: the raw body is still returned
            log.warning('submitter.parse_warning', error=str(e))

        return BatchResult.succeeded(
            batch=batch,
            item_count=item_count,
            status=response.status_code,
            raw_response=response.text,
            parsed_response=parsed,
        )
