"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from board.config import AuthSettings
from board.util.error import TokenError


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str
    exp: datetime


def create_token(
    user_id: str, settings: AuthSettings, expires_in: timedelta | None = None
) -> str:
    """Create a signed access token for a user.

    Tokens are normally issued by the identity service; this is used by
    local tooling and tests.

    Args:
        user_id: User ID (stored as the ``sub`` claim)
        settings: Authentication settings
        expires_in: Lifetime of the token (defaults to the configured expiry)

    Returns:
        Encoded JWT token
    """
    lifetime = expires_in or timedelta(days=settings.jwt_expiry_days)
    payload = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + lifetime,
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
        TokenError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except (jwt.InvalidTokenError, PydanticValidationError):
        raise TokenError("Invalid token")
