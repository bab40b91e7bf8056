"""
Response envelope.

Every response body, success or error, has the same shape:

    {"success": bool, "message": str, "data"?: {...}, "errors"?: [...], "code"?: str}

Keys inside ``data`` are camelCase.
"""

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, model_serializer


class FieldError(BaseModel):
    """One invalid input field."""

    field: str
    message: str


class ApiResponse(BaseModel):
    """Standard response format."""

    success: bool
    message: str
    data: Optional[Any] = None
    errors: Optional[list[FieldError]] = None
    code: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_empty(self, handler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


def ok(message: str, data: Optional[dict[str, Any]] = None) -> ApiResponse:
    """
    Build a success envelope.

    Pydantic models inside ``data`` are dumped by alias so profile fields
    come out camelCase.
    """
    return ApiResponse(
        success=True,
        message=message,
        data=jsonable_encoder(data, by_alias=True) if data is not None else None,
    )
