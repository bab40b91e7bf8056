"""API models package."""

from .responses import ApiResponse, FieldError, ok

__all__ = [
    "ApiResponse",
    "FieldError",
    "ok",
]
