"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/api/health")
async def health():
    """Static liveness check."""
    return {"status": "OK", "message": "SOAP server is running"}
