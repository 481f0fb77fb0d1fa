from fastapi import Depends, Request, Response
from fastapi_limiter.depends import RateLimiter

from app.config import settings


def rate_limited(times: int, seconds: int):
    """RateLimiter dependency that becomes a no-op when limiting is disabled."""
    limiter = RateLimiter(times=times, seconds=seconds)

    async def dependency(request: Request, response: Response):
        if not settings.RATE_LIMIT_ENABLED:
            return
        await limiter(request, response)

    return Depends(dependency)
