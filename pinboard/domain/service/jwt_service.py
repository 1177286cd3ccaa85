"""JWT token domain service."""

import logfire

from pinboard.config import AuthSettings
from pinboard.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations.

    Tokens are issued by the identity service; ``create_token`` exists for
    tooling and tests.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(
        self, user_id: str, handle: str, name: str = "", is_admin: bool = False
    ) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            handle: User handle
            name: Display name
            is_admin: Admin flag

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id, handle=handle):
            return create_token(
                user_id, handle, self.auth_settings, name=name, is_admin=is_admin
            )

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract user ID from a token, treating bad tokens as anonymous.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except JWTError:
            return None
