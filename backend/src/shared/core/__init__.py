"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from src.shared.core.logging import logger, get_logger
    from src.shared.core.exceptions import TroopException, UserNotFoundError

    logger.info("Following added", user_id=user_id)
"""

from src.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from src.shared.core.exceptions import (
    TroopException,
    NotFoundError,
    UserNotFoundError,
    ValidationError,
    SelfReferenceError,
    ConflictError,
    UserAlreadyExistsError,
    ServiceUnavailableError,
    ExternalServiceError,
    IdentityProviderError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "TroopException",
    "NotFoundError",
    "UserNotFoundError",
    "ValidationError",
    "SelfReferenceError",
    "ConflictError",
    "UserAlreadyExistsError",
    "ServiceUnavailableError",
    "ExternalServiceError",
    "IdentityProviderError",
]
