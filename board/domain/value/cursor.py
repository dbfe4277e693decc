"""Opaque pagination cursor.

A cursor records the position of the last root comment of a page, ordered by
``(created_at, id)``. Encoding the position rather than a bare id keeps the
cursor usable after the referenced comment has been removed.
"""

import binascii
from base64 import urlsafe_b64decode, urlsafe_b64encode
from datetime import datetime

from pydantic import AwareDatetime
from pydantic import ValidationError as PydanticValidationError

from board.domain.error import ValidationError
from board.domain.value.common import ValueObject
from board.domain.value.identifiers import CommentId


class PageCursor(ValueObject):
    """Position of the last root comment already returned to the caller."""

    created_at: AwareDatetime
    comment_id: CommentId

    def encode(self) -> str:
        """Serialize to a url-safe token (padding stripped)."""
        raw = self.model_dump_json().encode("utf-8")
        return urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    @classmethod
    def decode(cls, token: str) -> "PageCursor":
        """Parse a token produced by :meth:`encode`.

        Raises:
            ValidationError: If the token is malformed
        """
        padded = token + "=" * (-len(token) % 4)
        try:
            raw = urlsafe_b64decode(padded.encode("ascii"))
            return cls.model_validate_json(raw)
        except (binascii.Error, UnicodeError, ValueError, PydanticValidationError):
            raise ValidationError("Invalid cursor") from None

    def sort_key(self) -> tuple[datetime, str]:
        """Ordering key comparable with ``Comment.sort_key()``."""
        return (self.created_at, str(self.comment_id))
