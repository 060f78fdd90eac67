"""
Health check
"""
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger

from database.repository import SupabaseRepository, get_repository

from .config import Settings, get_settings

router = APIRouter(tags=["Health"])

_started_at = time.monotonic()


@router.get("/health")
async def health(
    repo: SupabaseRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings)
):
    """Storage connectivity check"""
    body = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 1),
        "environment": settings.environment,
    }

    try:
        await repo.ping()
    except Exception as e:
        logger.warning(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={**body, "status": "unhealthy", "database": "disconnected"},
        )

    return {**body, "status": "healthy", "database": "connected"}
