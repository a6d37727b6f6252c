"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schema, response envelopes, health
- user: Registration, user projection, relationship updates

Usage:
======
    from src.shared.schemas.user import UserCreate, UserResponse, to_user_response
    from src.shared.schemas.common import ApiResponse, ErrorResponse
"""

from src.shared.schemas.common import (
    BaseSchema,
    ApiResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from src.shared.schemas.user import (
    UserCreate,
    UserResponse,
    RelationshipUpdate,
    UserExistsResponse,
    to_user_response,
)

__all__ = [
    # Common
    "BaseSchema",
    "ApiResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # User
    "UserCreate",
    "UserResponse",
    "RelationshipUpdate",
    "UserExistsResponse",
    "to_user_response",
]
