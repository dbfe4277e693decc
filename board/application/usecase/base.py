"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from board.domain.error import NotFoundError, ValidationError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_id(value: str, resource: str) -> UUID:
    """Parse a path identifier; a malformed id names nothing that exists.

    Raises:
        NotFoundError: If ``value`` is not a UUID
    """
    try:
        return UUID(value)
    except ValueError:
        raise NotFoundError(resource, value) from None


def parse_user_id(value: str) -> UUID:
    """Parse a verified user id.

    Raises:
        ValidationError: If ``value`` is not a UUID
    """
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid user id: {value}") from None
