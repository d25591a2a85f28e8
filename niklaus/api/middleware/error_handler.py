"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from niklaus.application.dto.responses import ErrorResponse
from niklaus.config import get_logger
from niklaus.core.exceptions import (
    AccessDenied,
    AuthError,
    ConfigurationError,
    InferenceError,
    NiklausError,
    OrderWriteError,
    ProductNotFoundError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes (first match wins)
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    AuthError: status.HTTP_401_UNAUTHORIZED,
    AccessDenied: status.HTTP_403_FORBIDDEN,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
    OrderWriteError: status.HTTP_502_BAD_GATEWAY,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InferenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
    KeyError: status.HTTP_404_NOT_FOUND,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "AUTH_ERROR": "Check the email and password and try again.",
    "NOT_AUTHENTICATED": "Sign in with POST /api/auth/sign-in first.",
    "ACCESS_DENIED": "The signed-in profile is not authorized for this resource.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "PRODUCT_NOT_FOUND": "Check the product ID and try GET /api/catalog to list products.",
    "ORDER_WRITE_FAILED": "The order was not saved and the cart was kept. Submit again.",
    "SESSION_NOT_FOUND": "Create a session with POST /api/session and send its X-Session-ID header.",
    "INFERENCE_UNAVAILABLE": "The support assistant is offline. Retry later.",
    "CIRCUIT_BREAKER_OPEN": "Too many assistant failures. Wait for cooldown before retrying.",
    "ValueError": "A parameter value is invalid. Check the request.",
    "KeyError": "The requested key was not found.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Sign in and retry.",
    403: "The current profile cannot perform this action.",
    404: "The requested resource was not found. Verify the ID.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    502: "An upstream store rejected the request. Retry.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _render(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    hint = HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=message,
            hint=hint,
            detail=detail,
            path=request.url.path,
        ).model_dump(mode="json"),
    )


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain or unexpected exception as an ErrorResponse."""
    status_code = _status_for(exc)
    if isinstance(exc, NiklausError):
        error_code, message = exc.code, exc.message
    else:
        error_code, message = exc.__class__.__name__, str(exc)

    # Client mistakes are routine; only server-side failures carry a traceback
    if status_code >= 500:
        logger.error(
            "request_error",
            request_id=getattr(request.state, "request_id", None),
            path=request.url.path,
            error_type=error_code,
            error=message,
            traceback=traceback.format_exc(),
        )
    else:
        logger.info("request_rejected", path=request.url.path, error_type=error_code, error=message)

    return _render(request, status_code, error_code, message)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last-resort conversion of exceptions escaping the route handlers."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return error_response(request, e)


def _http_error_code(status_code: int, detail: str) -> str:
    if status_code == status.HTTP_404_NOT_FOUND:
        return "SESSION_NOT_FOUND" if "session" in detail.lower() else "NOT_FOUND"
    return {
        status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
        status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    }.get(status_code, "HTTP_ERROR")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, validation and HTTP errors."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(NiklausError)
    async def domain_exception_handler(request: Request, exc: NiklausError) -> JSONResponse:
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        problems = "; ".join(
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return _render(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail=problems,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        detail = str(exc.detail or "An error occurred")
        return _render(request, exc.status_code, _http_error_code(exc.status_code, detail), detail)
