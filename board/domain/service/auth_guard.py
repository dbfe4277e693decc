"""Request authentication."""

from typing import Optional
from uuid import UUID

import logfire

from board.config import AuthSettings
from board.domain.error import AuthenticationError
from board.domain.value import UserId
from board.util.error import TokenError
from board.util.jwt import verify_token

from .base import Service


class AuthGuard(Service):
    """Turns an access token into a verified user id.

    The comment core trusts the id it returns unconditionally.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize auth guard.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def identify(self, token: Optional[str]) -> Optional[UserId]:
        """Verified user id for ``token``, or None when missing or invalid."""
        if not token:
            return None
        try:
            payload = verify_token(token, self.auth_settings)
            return UserId(UUID(payload.sub))
        except (TokenError, ValueError) as e:
            logfire.debug("Token rejected, treating as anonymous", error=str(e))
            return None

    def require(self, token: Optional[str]) -> UserId:
        """Verified user id for ``token``.

        Raises:
            AuthenticationError: If the token is missing or invalid
        """
        user_id = self.identify(token)
        if user_id is None:
            raise AuthenticationError("Authentication required")
        return user_id
