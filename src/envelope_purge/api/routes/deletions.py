"""POST /api/send-soap: validate uploaded rows and run the deletion pipeline."""

import structlog
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from envelope_purge.errors import InvalidInputError
from envelope_purge.pipeline.pipeline import DeletionPipeline

logger = structlog.get_logger(__name__)

router = APIRouter()

# HTTP status returned for a run stopped by a fatal batch error
ABORT_STATUS = {
    "Timeout": 408,
    "ServiceUnavailable": 503,
}
ABORT_MESSAGE = {
    "Timeout": "Request timeout",
    "ServiceUnavailable": "Service unavailable",
}


@router.post("/api/send-soap")
async def send_soap(payload: dict[str, Any], request: Request):
    """Delete every envelope listed in ``data`` under ``contextId``."""
    data = payload.get("data")
    context_id = payload.get("contextId")

    if not isinstance(data, list):
        return JSONResponse(status_code=400, content={"error": "No valid data provided"})
    if not isinstance(context_id, str) or not context_id.strip():
        return JSONResponse(status_code=400, content={"error": "ContextId is required"})

    log = logger.bind(record_count=len(data))
    log.info("send_soap.received")

    try:
        pipeline = DeletionPipeline(
            client=request.app.state.soap_client,
            batch_size=request.app.state.batch_size,
            inter_batch_delay_ms=request.app.state.inter_batch_delay_ms,
        )
        summary = await pipeline.run(data, context_id)
    except InvalidInputError as e:
        log.warning("send_soap.invalid_input", error=e.message, context=e.context)
        return JSONResponse(
            status_code=400,
            content={"error": e.message, "details": e.context},
        )
    except Exception as e:
        log.error("send_soap.failed", error=str(e), error_type=type(e).__name__)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "SOAP call failed",
                "details": str(e),
                "type": type(e).__name__,
            },
        )

    body = summary.to_dict()
    if summary.aborted:
        log.error(
            "send_soap.aborted",
            reason=summary.abort_reason,
            batch=summary.aborted_batch,
        )
        body["error"] = ABORT_MESSAGE.get(summary.abort_reason, "Run aborted")
        body["batch"] = summary.aborted_batch
        return JSONResponse(
            status_code=ABORT_STATUS.get(summary.abort_reason, 500),
            content=body,
        )

    log.info(
        "send_soap.complete",
        successful_batches=summary.successful_batches,
        total_batches=summary.total_batches,
    )
    return body
