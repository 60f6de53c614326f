"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for all API errors.

    Attributes:
        code: Machine-readable error code (e.g., "INVALID_COORDINATE", "UPSTREAM_STORE_ERROR")
        message: Human-readable error message
        details: Optional additional error details (violated field, failing store)
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "INVALID_COORDINATE",
                "message": "InvalidCoordinateError: A valid latitude is required",
                "details": {"field": "latitude", "exception_type": "InvalidCoordinateError"},
            }
        }
    )

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )
