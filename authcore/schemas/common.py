"""Common response schemas used across the API."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Standard success envelope: ``{"success": true, "data": ...}``."""

    success: bool = True
    data: T


class ErrorDetail(BaseModel):
    """Detailed error information for a specific field or issue.

    Attributes:
        field: The field name that caused the error (None for general errors)
        message: Human-readable error description
    """

    field: str | None = Field(None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response format for API errors.

    Attributes:
        success: Always False
        error: Stable error kind (e.g., 'auth_error', 'token_error')
        message: Human-readable error message
        details: Additional error details (e.g., validation errors per field)
    """

    success: bool = False
    error: str = Field(..., description="Stable error kind")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] | None = Field(None, description="Additional error details")
