"""Thread use cases."""

from .toggle_like import (
    ToggleThreadLikeRequest,
    ToggleThreadLikeResponse,
    ToggleThreadLikeUseCase,
)

__all__ = [
    "ToggleThreadLikeRequest",
    "ToggleThreadLikeResponse",
    "ToggleThreadLikeUseCase",
]
