from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+asyncpg://user:password@db:5432/realty_db"
    DB_ECHO: bool = False
    REDIS_URL: str = "redis://localhost:6379/0"
    RATE_LIMIT_ENABLED: bool = True
    # Sessions are issued elsewhere; admin tokens are checked against this service
    AUTH_SERVICE_URL: str = "http://auth:8000"
    AUTH_TIMEOUT_SECONDS: float = 10.0
    # Uploaded images land on disk and are served back under UPLOAD_URL_PREFIX
    UPLOAD_DIR: str = "public/uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"]
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
