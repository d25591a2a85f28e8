"""
Catalog domain entities: legal-entity accounts and products.

Both are owned by the administrative side and only read live by the session.
"""

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """Legal-entity account (CNPJ) a user can order on behalf of."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    cnpj: str = Field(..., min_length=1, description="Tax registration number")
    trade_name: str | None = None

    # Address
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None

    @property
    def display_name(self) -> str:
        return self.trade_name or self.name


class Product(BaseModel):
    """Catalog product."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str | None = None
    category: str | None = None
    unit: str | None = None
    image_url: str | None = None
    price: float = Field(..., ge=0)
    available: bool = True
