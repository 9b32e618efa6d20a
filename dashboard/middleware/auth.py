### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Bearer Token Authentication -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Bearer Token Authentication

Resolves the signed-in hotel user from the provider access token in the
Authorization header. Failures raise AuthRequiredError so the client is
told where to sign in.
"""

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dashboard.schemas.entities import User
from dashboard.services.auth import TokenAuthClient

# Bearer token issued by the auth provider
bearer_scheme = HTTPBearer(auto_error=False, description="Auth provider access token")

_auth_client: TokenAuthClient | None = None


def get_auth_client() -> TokenAuthClient:
    """Dependency that provides the auth provider client"""
    global _auth_client
    if _auth_client is None:
        _auth_client = TokenAuthClient.from_settings()
    return _auth_client


def reset_auth_client() -> None:
    global _auth_client
    _auth_client = None


async def get_current_user(
    request: Request,
    bearer: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    auth_client: TokenAuthClient = Depends(get_auth_client),
) -> User:
    """
    Resolve the current user from the Authorization: Bearer header

    Args:
        request: FastAPI request object (for storing the user)
        bearer: Credentials parsed by HTTPBearer
        auth_client: Token verifier

    Returns:
        The signed-in User

    Raises:
        AuthRequiredError: If no valid token is provided
    """
    token = bearer.credentials if bearer else None
    user = auth_client.get_current_user(token)

    # Store in request state for request logging and rate limiting
    request.state.user = user
    return user
