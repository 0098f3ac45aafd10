"""Health check endpoints."""
from fastapi import APIRouter

from simples_api.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check. Does not touch the database."""
    return HealthResponse()
