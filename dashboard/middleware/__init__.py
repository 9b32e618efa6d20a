### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Middleware Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Middleware Package

Contains middleware for request processing:
- auth: bearer token -> current user
- logging: Request/response logging
- rate_limit: per-user write rate limiting
"""

from .auth import get_auth_client, get_current_user
from .logging import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "get_auth_client",
    "get_current_user",
]
