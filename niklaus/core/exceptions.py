"""
Domain exceptions for the Niklaus B2B session core.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class NiklausError(Exception):
    """Base exception for all Niklaus errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Auth Exceptions
class AuthError(NiklausError):
    """Credential or auth-provider failure."""

    def __init__(self, message: str, reason: str | None = None):
        super().__init__(
            message,
            code="AUTH_ERROR",
            details={"reason": reason} if reason else {},
        )


class NotAuthenticatedError(AuthError):
    """Operation requires a resolved profile."""

    def __init__(self, operation: str):
        super().__init__(f"Sign in required for {operation}")
        self.code = "NOT_AUTHENTICATED"
        self.details = {"operation": operation}


# Storage Exceptions
class StorageError(NiklausError):
    """Base exception for collaborator store operations."""

    pass


class ProfileStoreError(StorageError):
    """Profile store read or write failed."""

    def __init__(self, operation: str, profile_id: str, error: str):
        super().__init__(
            f"Profile store {operation} failed for {profile_id}: {error}",
            code="PROFILE_STORE_ERROR",
            details={"operation": operation, "profile_id": profile_id, "error": error},
        )


class OrderWriteError(StorageError):
    """Order could not be written; the cart is preserved."""

    def __init__(self, order_id: str, error: str):
        super().__init__(
            f"Failed to write order {order_id}: {error}",
            code="ORDER_WRITE_FAILED",
            details={"order_id": order_id, "error": error},
        )


class DecodeError(NiklausError):
    """Stored or pushed record does not match its schema."""

    def __init__(self, record_type: str, record_id: str | None, reason: str):
        super().__init__(
            f"Cannot decode {record_type} '{record_id}': {reason}",
            code="DECODE_ERROR",
            details={"record_type": record_type, "record_id": record_id, "reason": reason},
        )


# Authorization Exceptions
class AccessDenied(NiklausError):
    """Entity or view not permitted for the current profile."""

    def __init__(self, resource: str, resource_id: str | None = None):
        super().__init__(
            f"Access denied to {resource}" + (f" '{resource_id}'" if resource_id else ""),
            code="ACCESS_DENIED",
            details={"resource": resource, "resource_id": resource_id},
        )


# Validation Exceptions
class ValidationError(NiklausError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class ProductNotFoundError(NiklausError):
    """Product is not in the live catalog."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


# Inference Exceptions
class InferenceError(NiklausError):
    """Base exception for inference operations."""

    pass


class InferenceUnavailableError(InferenceError):
    """Inference provider is not available."""

    def __init__(self, provider: str, reason: str | None = None):
        super().__init__(
            f"Inference provider unavailable: {provider}" + (f" - {reason}" if reason else ""),
            code="INFERENCE_UNAVAILABLE",
            details={"provider": provider, "reason": reason},
        )


class InferenceTimeoutError(InferenceError):
    """Inference request timed out."""

    def __init__(self, timeout: int):
        super().__init__(
            f"Inference timed out after {timeout} seconds",
            code="INFERENCE_TIMEOUT",
            details={"timeout": timeout},
        )


class CircuitBreakerOpenError(InferenceError):
    """Circuit breaker is open due to repeated failures."""

    def __init__(self, provider: str, cooldown_remaining: int):
        super().__init__(
            f"Circuit breaker open for {provider}, retry in {cooldown_remaining}s",
            code="CIRCUIT_BREAKER_OPEN",
            details={"provider": provider, "cooldown_remaining": cooldown_remaining},
        )


class ConfigurationError(NiklausError):
    """Configuration error."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR")
