"""FastAPI application for the envelope purge service."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from envelope_purge.clients.soap_client import DocumentServiceClient
from envelope_purge.config import config

from .config import get_settings
from .routes.deletions import router as deletions_router
from .routes.health import router as health_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the document service client at startup, close it at shutdown."""
    invalid = config.validate()
    if invalid:
        raise RuntimeError(f"Invalid configuration: {', '.join(invalid)}")

    soap_client = DocumentServiceClient(
        url=config.SOAP_URL,
        soap_action=config.SOAP_ACTION,
        user_agent=config.SOAP_USER_AGENT,
        timeout_ms=config.REQUEST_TIMEOUT_MS,
    )
    await soap_client.connect()

    logger.info(
        "lifespan.startup",
        soap_url=config.SOAP_URL,
        batch_size=config.BATCH_SIZE,
        timeout_ms=config.REQUEST_TIMEOUT_MS,
        inter_batch_delay_ms=config.INTER_BATCH_DELAY_MS,
    )

    # Store on app.state for request handlers
    app.state.soap_client = soap_client
    app.state.batch_size = config.BATCH_SIZE
    app.state.inter_batch_delay_ms = config.INTER_BATCH_DELAY_MS

    logger.info("lifespan.ready")
    yield

    logger.info("lifespan.shutdown")
    await soap_client.close()


app = FastAPI(
    title="envelope-purge",
    description="Bulk DocumentNOW envelope deletion via batched SOAP requests",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(deletions_router)
