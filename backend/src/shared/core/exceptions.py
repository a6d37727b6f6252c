"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    TroopException (base)
       │
       ├── NotFoundError (404)              ← Referenced resource does not exist
       │      └── UserNotFoundError
       ├── ValidationError (400)            ← Invalid caller input
       │      └── SelfReferenceError        ← User tried to follow themselves
       ├── ConflictError (409)              ← Resource already exists
       │      └── UserAlreadyExistsError    ← Username or email taken
       └── ServiceUnavailableError (503)    ← Dependency down
              └── ExternalServiceError
                     └── IdentityProviderError

Usage:
======
    from src.shared.core.exceptions import UserNotFoundError, SelfReferenceError

    raise UserNotFoundError(str(user_id))
    # Results in: {"error": {"code": "NOT_FOUND", "message": "User with id 'abc' not found"}}

Exception Handling:
===================
    Errors are terminal for the call that raised them. The API error handler
    converts them to JSON:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "User with id 'abc-123' not found",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class TroopException(Exception):
    """
    Base exception for all user service errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(TroopException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("User", user_id)
        # Message: "User with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found, looked up by id or by username."""

    def __init__(self, user_id: Optional[str] = None, username: Optional[str] = None) -> None:
        if username and not user_id:
            super().__init__(
                resource=f"User with username '{username}'",
                details={"username": username},
            )
        else:
            super().__init__(resource="User", resource_id=user_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(TroopException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details,
        )


class SelfReferenceError(ValidationError):
    """
    A user cannot appear in their own followers or followings.

    Example:
        raise SelfReferenceError("followers")
        # Message: "Cannot add yourself to the followers list"
    """

    def __init__(self, relation: str) -> None:
        super().__init__(
            message=f"Cannot add yourself to the {relation} list",
            details={"relation": relation},
            error_code="SELF_REFERENCE",
        )


class ConflictError(TroopException):
    """
    Resource conflict error (409 Conflict).

    Raised when operation conflicts with existing resource.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class UserAlreadyExistsError(ConflictError):
    """Username or email is already registered."""

    def __init__(
        self,
        message: str = "User is already present, choose a different email or username",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICE ERRORS (503)
# ═══════════════════════════════════════════════════════════════════════════════


class ServiceUnavailableError(TroopException):
    """
    Service temporarily unavailable error (503).
    """

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=503,
            error_code="SERVICE_UNAVAILABLE",
            details=details,
        )


class ExternalServiceError(ServiceUnavailableError):
    """
    External service error.

    More specific error for external API failures.
    """

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        msg = message or f"{service_name} service error"
        extra_details = details or {}
        extra_details["service"] = service_name
        super().__init__(message=msg, details=extra_details)


class IdentityProviderError(ExternalServiceError):
    """Keycloak rejected a request or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
    ) -> None:
        details = {"upstream_status": status_code} if status_code is not None else None
        super().__init__(service_name="keycloak", message=message, details=details)
