### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Auth Provider Client -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Auth Provider Client

Resolves "get current user" from the access token issued by the hosted
auth provider. Sign in, sign up and sign out happen at the provider;
this side only verifies the HS256 signature, audience and expiry.

Claims used:
- sub: user id
- email
- user_metadata.name / user_metadata.full_name / user_metadata.avatar_url
- app_metadata.role (owner | manager | staff, default owner)
"""

import logging
from typing import Any, Optional

import jwt

from dashboard.config import get_api_settings
from dashboard.exceptions import AuthRequiredError
from dashboard.schemas.entities import User

logger = logging.getLogger(__name__)

_ROLES = ("owner", "manager", "staff")


class TokenAuthClient:
    """Verifies provider access tokens and maps their claims to a User"""

    def __init__(
        self,
        secret: str,
        audience: Optional[str] = "authenticated",
        algorithm: str = "HS256",
        login_path: str = "/login",
    ):
        self.secret = secret
        self.audience = audience
        self.algorithm = algorithm
        self.login_path = login_path

    @classmethod
    def from_settings(cls) -> "TokenAuthClient":
        settings = get_api_settings()
        return cls(
            secret=settings.jwt_secret,
            audience=settings.jwt_audience or None,
            algorithm=settings.jwt_algorithm,
            login_path=settings.login_path,
        )

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify a token and return its claims.

        Raises:
            AuthRequiredError: If the token is expired, forged or malformed
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={"require": ["sub", "exp"], "verify_aud": self.audience is not None},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthRequiredError("Session expired, please sign in again", redirect_to=self.login_path) from e
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected access token: {e}")
            raise AuthRequiredError("Invalid access token", redirect_to=self.login_path) from e

    def get_current_user(self, token: Optional[str]) -> User:
        """
        Resolve the signed-in user from an access token.

        Raises:
            AuthRequiredError: If no token was sent or it does not verify
        """
        if not token:
            raise AuthRequiredError(redirect_to=self.login_path)

        claims = self.decode(token)
        user_metadata = claims.get("user_metadata") or {}
        app_metadata = claims.get("app_metadata") or {}

        email = claims.get("email") or ""
        name = user_metadata.get("name") or user_metadata.get("full_name") or email.split("@")[0]
        role = app_metadata.get("role")
        if role not in _ROLES:
            role = "owner"

        return User(
            id=str(claims["sub"]),
            name=name or "Hotel Owner",
            email=email,
            avatar=user_metadata.get("avatar_url"),
            role=role,
        )
