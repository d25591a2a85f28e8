"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and the session controller.
"""

from pydantic import BaseModel, Field

from niklaus.core.entities import Entity, Product, View


class SignInRequest(BaseModel):
    """Credentials for sign-in."""

    email: str = Field(..., description="Account email", examples=["rep@empresa.com.br"])
    password: str = Field(..., description="Account password")


class RegisterRequest(BaseModel):
    """New account plus the profile seed.

    Name and category are attached to the new identity and used when the
    profile is first created.
    """

    email: str = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Account password")
    name: str = Field(..., min_length=1, description="Display name for the profile")
    category: str | None = Field(
        default=None,
        description="Customer category",
        examples=["Distribuidor", "Varejo"],
    )


class SetViewRequest(BaseModel):
    """Switch the current page."""

    view: View = Field(..., description="Target view")


class SelectEntityRequest(BaseModel):
    """Select the entity (CNPJ) to act as."""

    entity_id: str = Field(..., min_length=1, description="Entity ID")


class AddToCartRequest(BaseModel):
    """Add a catalog product to the cart."""

    product_id: str = Field(..., min_length=1, description="Product ID")


class AdjustQuantityRequest(BaseModel):
    """Shift a cart line's quantity; the result never drops below 1."""

    delta: int = Field(..., description="Quantity change", examples=[1, -1, 2])


class SupportMessageRequest(BaseModel):
    """Message for the support assistant."""

    text: str = Field(..., description="Message text", examples=["Qual o prazo de entrega?"])


class EntityUpsertRequest(BaseModel):
    """Backoffice create/update of an entity."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, description="Legal name")
    cnpj: str = Field(..., min_length=1, description="Registration number")
    trade_name: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None

    def to_entity(self) -> Entity:
        return Entity.model_validate(self.model_dump())


class ProductUpsertRequest(BaseModel):
    """Backoffice create/update of a product."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str | None = None
    category: str | None = None
    unit: str | None = Field(default=None, examples=["cx", "un", "kg"])
    image_url: str | None = None
    price: float = Field(..., ge=0)
    available: bool = True

    def to_product(self) -> Product:
        return Product.model_validate(self.model_dump())
