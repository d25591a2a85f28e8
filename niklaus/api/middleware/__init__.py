"""API middleware."""

from niklaus.api.middleware.error_handler import ErrorHandlerMiddleware
from niklaus.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
