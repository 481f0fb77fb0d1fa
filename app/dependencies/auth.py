from typing import Optional

from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import httpx
from app.config import settings
from app.core.errors import AuthError, UnexpectedError
from structlog import get_logger

logger = get_logger()
security = HTTPBearer(auto_error=False)

async def verify_token(token: str) -> dict:
    async with httpx.AsyncClient(timeout=settings.AUTH_TIMEOUT_SECONDS) as client:
        try:
            response = await client.get(
                f"{settings.AUTH_SERVICE_URL}/auth/verify",
                headers={"Authorization": f"Bearer {token}"}
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Token verification failed", status_code=e.response.status_code)
            raise AuthError("Unauthorized: Invalid token")
        except httpx.RequestError as e:
            logger.error("Auth service is unavailable", url=settings.AUTH_SERVICE_URL, error=str(e))
            raise UnexpectedError("Authentication service is unavailable")

async def get_current_admin(credentials: Optional[HTTPAuthorizationCredentials] = Security(security)) -> dict:
    if credentials is None:
        raise AuthError("Unauthorized: Authentication required")
    user = await verify_token(credentials.credentials)
    if str(user.get("role") or "").upper() != "ADMIN":
        logger.warning("Non-admin attempted admin access", user_id=user.get("id"))
        raise AuthError("Forbidden: Admin access required")
    return user
