"""
Health Check Endpoints

- /health/live  - Liveness (process is up)
- /health/ready - Readiness (database answers)
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from datetime import datetime
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
import time

from apkstudio.core.config import settings
from apkstudio.core.database import get_db
from apkstudio.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


@router.get("/live")
async def liveness_check():
    """Liveness probe - returns 200 while the process is alive."""
    return {
        "status": "alive",
        "timestamp": datetime.utcnow().isoformat(),
        "app": settings.APP_NAME,
        "version": "1.0.0"
    }


@router.get("/ready")
async def readiness_check(request: Request, db: AsyncSession = Depends(get_db)):
    """Readiness probe - 503 if the database cannot be queried."""
    start = time.time()
    try:
        await db.execute(text("SELECT COUNT(*) FROM projects"))
    except Exception as e:
        logger.warning(f"[HealthCheck] Readiness check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "database": {"status": "unhealthy", "error": str(e)}}
        )

    return {
        "status": "ready",
        "timestamp": datetime.utcnow().isoformat(),
        "checks": {
            "database": {"status": "healthy", "latency_ms": round((time.time() - start) * 1000, 2)},
            "builds": {"tracked": len(request.app.state.build_store)},
        }
    }
