### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Request Logging Middleware -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Request Logging Middleware

Logs every dashboard request with attribution information:
- Who: signed-in user id (set by get_current_user)
- What: endpoint and method
- Result: status code, response time
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from dashboard.config import get_api_settings
from dashboard.utils import setup_logger

# Set up request logger
request_logger = setup_logger(
    "smartstay_requests",
    level=get_api_settings().log_level,
    log_to_file=get_api_settings().log_to_file,
    log_to_console=False,
)


def mask_token(authorization: str | None) -> str:
    """Show only the start of a bearer token"""
    if not authorization:
        return "none"
    token = authorization.split(" ", 1)[-1]
    return token[:8] + "..." if len(token) > 8 else "***"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging all dashboard requests

    Captures:
    - Request ID (8 chars, echoed as X-Request-ID)
    - Method, path and query
    - Bearer token (masked) and resolved user id
    - Client IP
    - Response status and time
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        method = request.method
        path = request.url.path
        query = str(request.url.query) if request.url.query else ""
        client_ip = request.client.host if request.client else "unknown"
        masked_token = mask_token(request.headers.get("Authorization"))

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            request_logger.error(f"[{request_id}] ERROR {method} {path} - {e!s}")
            raise

        response_time = (time.time() - start_time) * 1000  # ms

        user = getattr(request.state, "user", None)
        log_entry = (
            f"[{request_id}] "
            f"{method} {path}"
            f"{f'?{query}' if query else ''} "
            f"| token={masked_token} "
            f"| user={user.id if user else '-'} "
            f"| ip={client_ip} "
            f"| status={status_code} "
            f"| time={response_time:.2f}ms"
        )

        if status_code >= 500:
            request_logger.error(log_entry)
        elif status_code >= 400:
            request_logger.warning(log_entry)
        else:
            request_logger.info(log_entry)

        response.headers["X-Request-ID"] = request_id
        return response
