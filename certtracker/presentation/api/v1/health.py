import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from ....config import settings
from ....infrastructure.adapters import AdapterProvider
from ....infrastructure.logging import Timer
from ..dependencies import get_provider

router = APIRouter(tags=["health"])
logger = structlog.get_logger()


@router.get("/health", summary="Liveness probe")
async def health() -> dict:
    return {"status": "healthy", "service": settings.service_name}


@router.get("/health/ready", summary="Readiness probe")
async def readiness(provider: AdapterProvider = Depends(get_provider)) -> dict:
    """Ready once the certification store answers; the in-memory store always does."""
    if provider.database is None:
        return {"status": "ready", "store": {"kind": "memory", "status": "healthy"}}

    store = {"kind": "postgresql"}
    try:
        with Timer() as t:
            await provider.database.ping()
        store.update(status="healthy", latency_ms=t.duration_ms)
    except (SQLAlchemyError, OSError) as e:
        logger.error("Store readiness probe failed", error=str(e))
        store.update(status="unhealthy", error=type(e).__name__)

    return {"status": "ready" if store["status"] == "healthy" else "degraded", "store": store}
