"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, populate_by_name)
- ApiResponse: Success envelope {success, data, message}
- ErrorResponse: Error envelope produced by the exception handlers
- HealthResponse: Health check payload

Usage:
======
    from src.shared.schemas.common import ApiResponse

    return ApiResponse(data={"user": user_response}, message="User registered")
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


# Generic type for the envelope payload
DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All response schemas should inherit from this class.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Success envelope returned by the user endpoints.

    Example:
        {
            "success": true,
            "data": {"user": {...}},
            "message": "User registered"
        }
    """

    success: bool = True
    data: dict[str, DataT]
    message: str = ""


class ErrorDetail(BaseModel):
    """Error detail structure in error responses."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response schema.

    Example:
        {
            "error": {
                "code": "SELF_REFERENCE",
                "message": "Cannot add yourself to the followers list",
                "details": {"relation": "followers"}
            }
        }
    """

    error: ErrorDetail


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "troop-user-service"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
