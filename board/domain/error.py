"""Domain layer errors.

Every error carries a stable ``kind`` so callers can branch on it without
string matching.
"""


class DomainError(Exception):
    """Base domain error."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Invalid input, or an action on a deleted/locked target."""

    kind = "validation_error"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when a user acts on content they don't own."""

    kind = "forbidden"

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not allowed to modify {resource} {resource_id}"
        )


class ConflictError(DomainError):
    """Concurrent write conflict. Retried by the transaction manager."""

    kind = "conflict"


class InternalError(DomainError):
    """Storage failure that survived every retry."""

    kind = "internal_error"


class AuthenticationError(DomainError):
    """Missing, expired or invalid credentials."""

    kind = "unauthenticated"
