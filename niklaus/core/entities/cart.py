"""
Cart domain entities.

The cart is an immutable value owned by one session; every mutation produces
a new Cart.
"""

from pydantic import BaseModel, ConfigDict, Field

from niklaus.core.entities.catalog import Product


class CartLine(BaseModel):
    """Product snapshot paired with a quantity."""

    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(default=1, ge=1)

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


class Cart(BaseModel):
    """Ordered lines of the current session's cart."""

    model_config = ConfigDict(frozen=True)

    lines: tuple[CartLine, ...] = ()

    def get_line(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def __contains__(self, product_id: object) -> bool:
        return any(line.product_id == product_id for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> float:
        return sum(line.line_total for line in self.lines)
