"""
Main pipeline orchestrator for bulk envelope deletion.

Provides end-to-end processing:
1. Validate the records and context identifier
2. Split records into fixed-size chunks
3. Build one DeleteEnvelope SOAP request per chunk
4. Submit chunks strictly one at a time with a pause between them
5. Abort on timeout / service unavailable, continue on any other failure
6. Aggregate the per-batch results into a RunSummary
"""

from __future__ import annotations

import asyncio
import time
import uuid
from typing import Any, Awaitable, Callable, Mapping, Sequence

from pydantic import ValidationError as PydanticValidationError

from ..clients.soap_client import DocumentServiceClient
from ..config import config
from ..errors import BatchError, InvalidInputError
from ..logging import PipelineTimer, get_logger, logging_context
from ..models.records import DeletionRecord
from ..models.results import BatchResult, RunSummary
from .aggregator import summarize
from .chunker import chunk_records
from .envelope_builder import build_delete_envelope
from .submitter import BatchSubmitter

logger = get_logger(__name__)


def validate_records(records: Any) -> list[DeletionRecord]:
    """
    Coerce raw rows into DeletionRecords.

    Raises:
        InvalidInputError: If records is not a list or any row lacks a
            non-blank EnvelopeId or AuthToken
    """
    if records is None or isinstance(records, (str, bytes, Mapping)) or not isinstance(
        records, Sequence
    ):
        raise InvalidInputError('No valid data provided')

    validated = []
    for index, row in enumerate(records):
        if isinstance(row, DeletionRecord):
            validated.append(row)
            continue
        try:
            validated.append(DeletionRecord.model_validate(row))
        except PydanticValidationError as e:
            fields = sorted({str(err['loc'][0]) for err in e.errors() if err.get('loc')})
            raise InvalidInputError(
                f'Record {index + 1} is missing a required field',
                context={'record_index': index, 'fields': fields},
            ) from e
    return validated


class DeletionPipeline:
    """
    Sequential batched submission of envelope deletions.

    Batches are never sent concurrently: the provider rate-limits callers,
    so each batch waits for the previous response plus a fixed delay.

    Usage:
        pipeline = DeletionPipeline(DocumentServiceClient())
        summary = await pipeline.run(records, context_id='ctx-123')
    """

    def __init__(
        self,
        client: DocumentServiceClient,
        batch_size: int | None = None,
        inter_batch_delay_ms: int | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the pipeline.

        Args:
            client: Document service client used for every batch
            batch_size: Records per batch (defaults to config.BATCH_SIZE)
            inter_batch_delay_ms: Pause between batches (defaults to
                config.INTER_BATCH_DELAY_MS)
            sleep: Awaitable sleep used for the pause
        """
        self.client = client
        self.batch_size = batch_size if batch_size is not None else config.BATCH_SIZE
        self.inter_batch_delay_ms = (
            inter_batch_delay_ms
            if inter_batch_delay_ms is not None
            else config.INTER_BATCH_DELAY_MS
        )
        if self.batch_size <= 0:
            raise InvalidInputError(
                'Batch size must be a positive integer',
                context={'batch_size': self.batch_size},
            )
        if self.inter_batch_delay_ms < 0:
            raise ValueError('inter_batch_delay_ms must not be negative')

        self._sleep = sleep
        self.submitter = BatchSubmitter(client)

    async def run(
        self,
        records: Sequence[DeletionRecord | Mapping[str, Any]],
        context_id: str,
    ) -> RunSummary:
        """
        Delete every envelope in ``records``.

        Args:
            records: Ordered rows with EnvelopeId and AuthToken
            context_id: Provider context identifier for every request

        Returns:
            RunSummary; ``aborted`` is set when a timeout or unreachable
            service stopped the run early

        Raises:
            InvalidInputError: Before any network activity, if the input
                is malformed
        """
        if not isinstance(context_id, str) or not context_id.strip():
            raise InvalidInputError('ContextId is required')
        context_id = context_id.strip()
        validated = validate_records(records)

        run_id = uuid.uuid4().hex[:12]
        timer = PipelineTimer()
        t0 = time.monotonic()

        with logging_context(run_id=run_id, context_id=context_id):
            chunks = chunk_records(validated, self.batch_size)
            # Malformed input must fail before any network call
            envelopes = [build_delete_envelope(chunk, context_id) for chunk in chunks]
            logger.info(
                'pipeline.started',
                total_items=len(validated),
                total_batches=len(chunks),
                batch_size=self.batch_size,
            )

            results: list[BatchResult] = []
            abort_error: BatchError | None = None

            for index, (chunk, xml_body) in enumerate(zip(chunks, envelopes), start=1):
                logger.info(
                    'pipeline.batch_started',
                    batch=index,
                    total_batches=len(chunks),
                    item_count=len(chunk),
                )
                try:
                    with timer.stage(f'batch_{index}'):
                        result = await self.submitter.submit(
                            xml_body, batch=index, item_count=len(chunk)
                        )
                except BatchError as e:
                    # Only fatal classes escape the submitter
                    abort_error = e
                    results.append(
                        BatchResult.failed(
                            batch=index,
                            item_count=len(chunk),
                            error=e.message,
                            error_code=e.code,
                        )
                    )
                    logger.error(
                        'pipeline.aborted',
                        batch=index,
                        reason=e.code,
                        remaining_batches=len(chunks) - index,
                    )
                    break

                results.append(result)
                if not result.success:
                    logger.warning(
                        'pipeline.batch_failed_continuing',
                        batch=index,
                        error_code=result.error_code,
                    )

                if index < len(chunks) and self.inter_batch_delay_ms > 0:
                    await self._sleep(self.inter_batch_delay_ms / 1000)

            summary = summarize(
                results,
                total_batches=len(chunks),
                total_items=len(validated),
                abort_error=abort_error,
                processing_time_ms=int((time.monotonic() - t0) * 1000),
            )

            logger.info(
                'pipeline.complete',
                successful_batches=summary.successful_batches,
                total_batches=summary.total_batches,
                aborted=summary.aborted,
                attempted_items=summary.attempted_items,
                stage_timings=timer.summary()['stages'],
            )

        return summary
