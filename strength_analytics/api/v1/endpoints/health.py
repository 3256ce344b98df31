"""Health check endpoints for load balancers and monitoring."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from strength_analytics.core.config import Settings, get_settings
from strength_analytics.db.session import get_db
from strength_analytics.services.strength_standards import available_standards

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health(settings: Settings = Depends(get_settings)):
    """Liveness: the app is up and the standards tables are loaded."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "standards_loaded": len(available_standards()),
    }


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: app + DB connectivity."""
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected"}
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": str(e)},
        )
