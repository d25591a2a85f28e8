"""
Order domain entities.

Orders are created once per submission and never mutated by the session.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderStatus(str, Enum):
    """Order processing status."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    INVOICED = "INVOICED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class OrderItem(BaseModel):
    """Order line with the unit price captured at submission."""

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., min_length=1)
    product_name: str = ""
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


class Order(BaseModel):
    """Submitted order."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    entity_id: str = Field(..., min_length=1)
    profile_id: str = Field(..., min_length=1)
    items: tuple[OrderItem, ...] = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: OrderStatus = OrderStatus.PENDING

    @field_validator("created_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        # Documents written without an offset are UTC
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)

    @property
    def total(self) -> float:
        return sum(item.line_total for item in self.items)
