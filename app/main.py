from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi_limiter import FastAPILimiter
from redis.asyncio import Redis
from structlog import get_logger

from app.config import settings
from app.core.errors import register_error_handlers
from app.core.logging import setup_logging
from app.db import Database
from app.routers import admin, health, leads, public

logger = get_logger()

app = FastAPI(title="Realty Showcase API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)
app.include_router(public.router)
app.include_router(leads.router)
app.include_router(admin.router)
app.include_router(health.router)
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")


@app.on_event("startup")
async def startup_event():
    setup_logging()
    if getattr(app.state, "db", None) is None:
        app.state.db = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
    if settings.RATE_LIMIT_ENABLED:
        redis = Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
        await FastAPILimiter.init(redis)
        app.state.redis = redis
    logger.info("Service started", rate_limit=settings.RATE_LIMIT_ENABLED)


@app.on_event("shutdown")
async def shutdown_event():
    db = getattr(app.state, "db", None)
    if db is not None:
        await db.dispose()
    redis = getattr(app.state, "redis", None)
    if redis is not None:
        await redis.aclose()
