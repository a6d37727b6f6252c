"""
API Handlers

Route handlers for the user service.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from src.api.handlers import (
    health_handler,
    user_handler,
)

__all__ = [
    "health_handler",
    "user_handler",
]
