from fastapi import APIRouter, Request
from structlog import get_logger
from sqlalchemy.sql import text

from app.config import settings

logger = get_logger()
router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness(request: Request):
    details = {"status": "ok", "checks": {}}

    # Database check
    try:
        async with request.app.state.db.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        details["checks"]["database"] = "ok"
    except Exception as e:
        logger.warning("health db fail", error=str(e))
        details["checks"]["database"] = f"fail: {str(e)}"
        details["status"] = "degraded"

    # Redis only backs the rate limiter
    if settings.RATE_LIMIT_ENABLED:
        try:
            pong = await request.app.state.redis.ping()
            details["checks"]["redis"] = "ok" if pong else "fail"
        except Exception as e:
            logger.warning("health redis fail", error=str(e))
            details["checks"]["redis"] = f"fail: {str(e)}"
            details["status"] = "degraded"

    return details
