"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from niklaus.application.dto.requests import (
    AddToCartRequest,
    AdjustQuantityRequest,
    EntityUpsertRequest,
    ProductUpsertRequest,
    RegisterRequest,
    SelectEntityRequest,
    SetViewRequest,
    SignInRequest,
    SupportMessageRequest,
)
from niklaus.application.dto.responses import (
    BackofficeResponse,
    CartLineResponse,
    CartResponse,
    ChatTurnResponse,
    EntityResponse,
    ErrorResponse,
    HealthResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    ProductResponse,
    ProfileResponse,
    ProviderHealthResponse,
    SessionResponse,
    SupportChatResponse,
)

__all__ = [
    # Requests
    "SignInRequest",
    "RegisterRequest",
    "SetViewRequest",
    "SelectEntityRequest",
    "AddToCartRequest",
    "AdjustQuantityRequest",
    "SupportMessageRequest",
    "EntityUpsertRequest",
    "ProductUpsertRequest",
    # Responses
    "ProfileResponse",
    "EntityResponse",
    "ProductResponse",
    "CartLineResponse",
    "CartResponse",
    "OrderItemResponse",
    "OrderResponse",
    "OrderListResponse",
    "ChatTurnResponse",
    "SupportChatResponse",
    "SessionResponse",
    "BackofficeResponse",
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
