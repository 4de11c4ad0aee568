"""Health check router."""

from fastapi import APIRouter
from pydantic import BaseModel

from seogen.api import config

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        service=config.SERVICE_NAME,
        version=config.SERVICE_VERSION,
    )
