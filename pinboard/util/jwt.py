"""JWT token utilities."""

from datetime import datetime, timedelta

import jwt
from pydantic import BaseModel

from pinboard.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload issued by the identity service."""

    user_id: str
    handle: str
    name: str = ""
    is_admin: bool = False
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    handle: str,
    settings: AuthSettings,
    name: str = "",
    is_admin: bool = False,
) -> str:
    """Create a JWT token for the user.

    Used by tests and local tooling; production tokens come from the
    identity service.

    Args:
        user_id: User ID
        handle: User handle
        settings: Authentication settings
        name: Display name
        is_admin: Admin flag

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now() + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "handle": handle,
        "name": name,
        "is_admin": is_admin,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
