"""
Common API response schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")


class ValidationErrorResponse(BaseModel):
    """Request body validation error format."""

    error: str = "validation_error"
    message: str = "Invalid request data"
    errors: list = Field(..., description="List of validation errors")
    status_code: int = 400
