### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Rate Limiting Middleware -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Rate Limiting Middleware

Per-user rate limiting of dashboard writes using slowapi.
Requests without a resolved user are limited by client IP.
"""

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from dashboard.config import get_api_settings


def get_user_identifier(request: Request) -> str:
    """
    Get rate limit identifier from the signed-in user.
    Falls back to IP address if no user was resolved.
    """
    user = getattr(request.state, "user", None)
    if user is not None:
        return f"user:{user.id}"
    return f"ip:{get_remote_address(request)}"


def write_rate_limit() -> str:
    """Limit applied to every mutating endpoint, e.g. "300/minute" """
    return f"{get_api_settings().rate_limit_per_minute}/minute"


# Create limiter instance
limiter = Limiter(
    key_func=get_user_identifier,
    storage_uri="memory://",
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Custom handler for rate limit exceeded errors"""
    retry_after = getattr(exc, "retry_after", 60)
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Rate limit exceeded. {exc.detail}",
            "code": "rate_limited",
            "request_id": getattr(request.state, "request_id", None),
        },
        headers={"Retry-After": str(retry_after)},
    )
