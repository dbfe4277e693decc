"""Access token extraction for routes."""


def request_token(auth_token: str | None, authorization: str | None) -> str | None:
    """Access token from the cookie, or from an ``Authorization: Bearer`` header."""
    if auth_token:
        return auth_token
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[len("bearer ") :].strip() or None
    return None
