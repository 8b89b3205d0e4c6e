"""
Rate Limiting for APK Studio API
================================
Implements rate limiting using slowapi with in-memory storage.

AI proxy endpoints forward to paid third-party APIs, so they carry a
stricter limit (AI_RATE_LIMIT) than the rest of the API.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from apkstudio.core.config import settings
from apkstudio.core.logging_config import logger


def get_client_identifier(request: Request) -> str:
    """
    Get rate limit key.

    Priority:
    1. API key (for CLI/integrations)
    2. IP address
    """
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"apikey:{api_key[:16]}"  # Use first 16 chars for privacy

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri="memory://",
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Return a JSON 429 with a Retry-After header"""
    retry_after = "60"

    logger.warning(
        f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": str(exc.detail),
            "retry_after_seconds": int(retry_after),
        },
        headers={"Retry-After": retry_after},
    )


def ai_operation_rate_limit():
    """Rate limit for AI proxy operations"""
    return limiter.limit(settings.AI_RATE_LIMIT, key_func=get_client_identifier)
