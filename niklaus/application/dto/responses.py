"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between the session controller and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from niklaus.core.entities import (
    Cart,
    Entity,
    Order,
    Product,
    Profile,
    SessionState,
    SupportChat,
)


class ProfileResponse(BaseModel):
    """Signed-in user's profile."""

    id: str
    email: str
    name: str
    role: str
    category: str | None = None
    entity_ids: list[str] = Field(default_factory=list, description="Authorized entity IDs")

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            email=profile.email,
            name=profile.name,
            role=profile.role.value,
            category=profile.category,
            entity_ids=sorted(profile.entity_ids),
        )


class EntityResponse(BaseModel):
    """Legal entity (CNPJ)."""

    id: str
    name: str
    cnpj: str
    display_name: str
    trade_name: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None

    @classmethod
    def from_entity(cls, entity: Entity) -> "EntityResponse":
        return cls(display_name=entity.display_name, **entity.model_dump())


class ProductResponse(BaseModel):
    """Catalog product."""

    id: str
    name: str
    description: str | None = None
    category: str | None = None
    unit: str | None = None
    image_url: str | None = None
    price: float
    available: bool = True

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(**product.model_dump())


class CartLineResponse(BaseModel):
    """Line in the cart."""

    product_id: str
    name: str
    unit_price: float
    quantity: int
    line_total: float


class CartResponse(BaseModel):
    """Current cart."""

    lines: list[CartLineResponse] = Field(default_factory=list)
    item_count: int = 0
    total: float = 0.0
    submitting: bool = False

    @classmethod
    def from_cart(cls, cart: Cart, submitting: bool = False) -> "CartResponse":
        return cls(
            lines=[
                CartLineResponse(
                    product_id=line.product_id,
                    name=line.product.name,
                    unit_price=line.product.price,
                    quantity=line.quantity,
                    line_total=line.line_total,
                )
                for line in cart.lines
            ],
            item_count=cart.item_count,
            total=cart.total,
            submitting=submitting,
        )


class OrderItemResponse(BaseModel):
    """Order line with its captured price."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    line_total: float


class OrderResponse(BaseModel):
    """Submitted order."""

    id: str
    entity_id: str
    profile_id: str
    items: list[OrderItemResponse]
    total: float
    status: str
    created_at: datetime

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            entity_id=order.entity_id,
            profile_id=order.profile_id,
            items=[
                OrderItemResponse(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                )
                for item in order.items
            ],
            total=order.total,
            status=order.status.value,
            created_at=order.created_at,
        )


class OrderListResponse(BaseModel):
    """Order history, newest first."""

    orders: list[OrderResponse]
    total: int


class ChatTurnResponse(BaseModel):
    """One support transcript turn."""

    role: str
    text: str
    position: int


class SupportChatResponse(BaseModel):
    """Support transcript and turn-taking state."""

    turns: list[ChatTurnResponse] = Field(default_factory=list)
    state: str = "idle"
    greeting: str | None = Field(default=None, description="Shown while the transcript is empty")

    @classmethod
    def from_chat(cls, chat: SupportChat, greeting: str | None = None) -> "SupportChatResponse":
        return cls(
            turns=[
                ChatTurnResponse(role=turn.role.value, text=turn.text, position=turn.position)
                for turn in chat.turns
            ],
            state=chat.state.value,
            greeting=greeting,
        )


class SessionResponse(BaseModel):
    """Complete view of one client session."""

    session_id: str
    authenticated: bool
    profile: ProfileResponse | None = None
    view: str
    selected_entity: EntityResponse | None = None
    chooser_open: bool = False
    needs_selection: bool = True
    cart: CartResponse
    chat: SupportChatResponse

    @classmethod
    def from_state(
        cls,
        session_id: str,
        state: SessionState,
        greeting: str | None = None,
    ) -> "SessionResponse":
        selected = state.selection.selected
        return cls(
            session_id=session_id,
            authenticated=state.is_authenticated,
            profile=ProfileResponse.from_profile(state.profile) if state.profile is not None else None,
            view=state.view.value,
            selected_entity=EntityResponse.from_entity(selected) if selected is not None else None,
            chooser_open=state.selection.chooser_open,
            needs_selection=state.selection.needs_selection,
            cart=CartResponse.from_cart(state.cart, state.submitting),
            chat=SupportChatResponse.from_chat(state.chat, greeting),
        )


class BackofficeResponse(BaseModel):
    """Admin-only content; empty with `available=False` for other roles."""

    available: bool
    entities: list[EntityResponse] = Field(default_factory=list)
    products: list[ProductResponse] = Field(default_factory=list)


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    sessions: int = 0
    inference: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ACCESS_DENIED)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
