"""Error Hierarchy — typed, categorized exceptions for all Conduit failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) are recoverable; infrastructure errors (5xx) are critical
    - Auth failures (401) are distinguishable from not-found (404) and forbidden (403)
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with ConduitError base: FastAPI global handler catches all
    - FieldValidationError carries a field-keyed message map, never a generic failure
    - Core raises, api/ maps to transport — core never knows about HTTP beyond http_status
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    FORBIDDEN = "forbidden"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    article_slug: str | None = None
    relation: str | None = None
    debug_info: dict[str, Any] | None = None


class ConduitError(Exception):
    """Base exception for all Conduit errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class FieldValidationError(ConduitError):
    """Uniqueness or format constraint violated on one or more fields."""
    def __init__(
        self, fields: dict[str, list[str]], context: ErrorContext | None = None,
    ):
        summary = "; ".join(
            f"{name} {' '.join(msgs)}" for name, msgs in fields.items()
        )
        super().__init__(
            summary or "Invalid input", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 422,
        )
        self.fields = fields

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["fields"] = self.fields
        return response


class AuthError(ConduitError):
    """Base for all authorization failures (401)."""
    def __init__(
        self, message: str, code: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class TokenInvalidError(AuthError):
    """Bearer token is malformed or its signature does not verify."""
    def __init__(self, reason: str = "Token is invalid", context: ErrorContext | None = None):
        super().__init__(reason, "TOKEN_INVALID", context)


class TokenExpiredError(AuthError):
    """Bearer token verified but its expiry is in the past."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Token has expired", "TOKEN_EXPIRED", context)


class CredentialsMissingError(AuthError):
    """An authenticated identity is required but none was supplied."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authorization token required", "CREDENTIALS_MISSING", context,
        )


class CredentialsInvalidError(AuthError):
    """Email/password pair (or the token's subject) does not resolve to a user."""
    def __init__(
        self, message: str = "email or password is invalid",
        context: ErrorContext | None = None,
    ):
        super().__init__(message, "CREDENTIALS_INVALID", context)


class ResourceNotFoundError(ConduitError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class ForbiddenActionError(ConduitError):
    """Authenticated identity may not perform this mutation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN_ACTION", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ConduitError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
