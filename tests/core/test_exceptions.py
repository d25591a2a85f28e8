"""Unit tests for domain exceptions."""

import pytest

from niklaus.core.exceptions import (
    AccessDenied,
    AuthError,
    CircuitBreakerOpenError,
    ConfigurationError,
    DecodeError,
    InferenceError,
    InferenceTimeoutError,
    InferenceUnavailableError,
    NiklausError,
    NotAuthenticatedError,
    OrderWriteError,
    ProductNotFoundError,
    ProfileStoreError,
    StorageError,
    ValidationError,
)


class TestNiklausError:
    """Tests for base NiklausError exception."""

    def test_basic_initialization(self):
        error = NiklausError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "NiklausError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = NiklausError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = NiklausError("Test error", code="TEST_CODE", details={"extra": "info"})
        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }


class TestAuthErrors:
    """Tests for authentication exceptions."""

    def test_auth_error(self):
        error = AuthError("Invalid email or password", reason="invalid-credential")
        assert error.code == "AUTH_ERROR"
        assert error.details == {"reason": "invalid-credential"}

    def test_not_authenticated(self):
        error = NotAuthenticatedError("submit_order")
        assert isinstance(error, AuthError)
        assert error.code == "NOT_AUTHENTICATED"
        assert error.details == {"operation": "submit_order"}
        assert "submit_order" in error.message


class TestStorageErrors:
    """Tests for store exceptions."""

    def test_profile_store_error(self):
        error = ProfileStoreError("read", "u1", "timeout")
        assert isinstance(error, StorageError)
        assert error.code == "PROFILE_STORE_ERROR"
        assert error.details["profile_id"] == "u1"

    def test_order_write_error(self):
        error = OrderWriteError("ORD-1", "permission denied")
        assert isinstance(error, StorageError)
        assert error.code == "ORDER_WRITE_FAILED"
        assert error.details == {"order_id": "ORD-1", "error": "permission denied"}

    def test_decode_error(self):
        error = DecodeError("Product", "P1", "price: field required")
        assert error.code == "DECODE_ERROR"
        assert "P1" in error.message


class TestAccessAndValidation:
    """Tests for authorization and validation exceptions."""

    def test_access_denied_with_id(self):
        error = AccessDenied("entity", "B")
        assert error.code == "ACCESS_DENIED"
        assert error.message == "Access denied to entity 'B'"

    def test_access_denied_without_id(self):
        assert AccessDenied("backoffice").message == "Access denied to backoffice"

    def test_validation_error(self):
        error = ValidationError("text", "Message cannot be empty", "   ")
        assert error.code == "VALIDATION_ERROR"
        assert error.details["field"] == "text"

    def test_product_not_found(self):
        error = ProductNotFoundError("X")
        assert error.code == "PRODUCT_NOT_FOUND"
        assert error.details == {"product_id": "X"}


class TestInferenceErrors:
    """Tests for inference exceptions."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (InferenceUnavailableError("gemini", "DNS failure"), "INFERENCE_UNAVAILABLE"),
            (InferenceTimeoutError(60), "INFERENCE_TIMEOUT"),
            (CircuitBreakerOpenError("gemini", 30), "CIRCUIT_BREAKER_OPEN"),
        ],
    )
    def test_codes_and_hierarchy(self, error, code):
        assert isinstance(error, InferenceError)
        assert error.code == code

    def test_unavailable_message_includes_reason(self):
        error = InferenceUnavailableError("ollama", "connection refused")
        assert "connection refused" in error.message


def test_configuration_error_is_domain_error():
    assert isinstance(ConfigurationError("missing key"), NiklausError)


def test_configuration_error_code():
    assert ConfigurationError("missing key").code == "CONFIGURATION_ERROR"
