"""Rate limiting for the validation endpoints using SlowAPI."""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from mailvet.config import get_settings

# Create limiter with IP-based key function
limiter = Limiter(key_func=get_remote_address)


def single_limit() -> str:
    """Per-client limit for single email validation."""
    return get_settings().rate_limit_single


def bulk_limit() -> str:
    """Per-client limit for bulk validation."""
    return get_settings().rate_limit_bulk


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Custom handler for rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please try again later."},
    )
