"""Error Hierarchy — typed, categorized exceptions for the admin shell.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Merchant-fixable errors are 4xx; platform/transport failures are 5xx
    - to_response() produces the REST envelope
    - Nothing in core/ raises these during checkout evaluation (fail-open)

Design Decisions:
    - Single hierarchy with HideCodError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    shop: str | None = None
    customization_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class HideCodError(Exception):
    """Base exception for all admin-side failures."""

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
                "context": {
                    "customization_id": self.context.customization_id,
                    "operation": self.context.operation,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ConfigurationValidationError(HideCodError):
    """Submitted configuration is unusable."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidRequestError(HideCodError):
    """Request body, path, or query failed schema validation."""
    def __init__(self, details: list[dict], context: ErrorContext | None = None):
        fields = ", ".join(d["field"] for d in details) or "request"
        super().__init__(
            f"Invalid request data: {fields}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class FunctionNotFoundError(HideCodError):
    """No deployed function is available to back a payment customization."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No Shopify Function found. Please run `shopify app function build` "
            "and `shopify app function deploy`, then try again.",
            "FUNCTION_NOT_FOUND", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 422,
        )


class ShopifyUserError(HideCodError):
    """Mutation rejected with GraphQL userErrors."""
    def __init__(
        self, operation: str, user_errors: list[dict],
        context: ErrorContext | None = None,
    ):
        messages = "; ".join(
            str(e.get("message", "")) for e in user_errors
        )
        super().__init__(
            f"{operation} rejected: {messages}",
            "SHOPIFY_USER_ERRORS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 422,
        )
        self.user_errors = user_errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["user_errors"] = self.user_errors
        return response


class ResourceNotFoundError(HideCodError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ShopifyAPIError(HideCodError):
    """Admin GraphQL call failed (transport, HTTP status, or top-level errors)."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Shopify API error ({api_error_type}): {message}",
            "SHOPIFY_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.api_error_type = api_error_type


class UnexpectedError(HideCodError):
    """Anything not raised through this hierarchy; message hides internals."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context, 500,
        )
