"""
Cart mutation semantics and order submission.

All cart operations take a Cart value and return a new one; nothing here
holds session state.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from niklaus.config import get_logger
from niklaus.core.entities.cart import Cart, CartLine
from niklaus.core.entities.catalog import Entity, Product
from niklaus.core.entities.order import Order, OrderItem, OrderStatus
from niklaus.core.entities.profile import Profile
from niklaus.core.exceptions import OrderWriteError, ValidationError
from niklaus.core.interfaces.storage import IOrderWriter

logger = get_logger(__name__)


@dataclass
class SubmitResult:
    """Result of a successful submission."""

    order: Order
    cart: Cart


def new_order_id() -> str:
    """Order ids are assigned by the session, not by the store."""
    return f"ORD-{uuid4().hex[:12].upper()}"


class CartEngine:
    """
    Cart operations against a mutable catalog.

    `add` is idempotent: adding a product already in the cart leaves its
    quantity unchanged; quantities only change through adjust_quantity.
    """

    def __init__(self, order_writer: IOrderWriter):
        self._orders = order_writer

    @staticmethod
    def add(cart: Cart, product: Product) -> Cart:
        if product.id in cart:
            return cart
        return Cart(lines=cart.lines + (CartLine(product=product, quantity=1),))

    @staticmethod
    def adjust_quantity(cart: Cart, product_id: str, delta: int) -> Cart:
        """Shift a line's quantity, never below 1."""
        if product_id not in cart:
            return cart
        return Cart(
            lines=tuple(
                line.model_copy(update={"quantity": max(1, line.quantity + delta)})
                if line.product_id == product_id
                else line
                for line in cart.lines
            )
        )

    @staticmethod
    def remove(cart: Cart, product_id: str) -> Cart:
        if product_id not in cart:
            return cart
        return Cart(lines=tuple(line for line in cart.lines if line.product_id != product_id))

    @staticmethod
    def clear(cart: Cart) -> Cart:
        return Cart()

    @staticmethod
    def reconcile(cart: Cart, catalog: Mapping[str, Product]) -> Cart:
        """
        Follow a new catalog snapshot.

        Lines pick up the latest product record; lines whose product left
        the catalog are dropped.
        """
        lines: list[CartLine] = []
        changed = False

        for line in cart.lines:
            latest = catalog.get(line.product_id)
            if latest is None:
                logger.info("cart_line_dropped", product_id=line.product_id)
                changed = True
                continue
            if latest != line.product:
                line = line.model_copy(update={"product": latest})
                changed = True
            lines.append(line)

        return Cart(lines=tuple(lines)) if changed else cart

    @staticmethod
    def validate_submission(cart: Cart, entity: Entity | None) -> None:
        """
        Raises:
            ValidationError: Empty cart or no entity selected
        """
        if cart.is_empty:
            raise ValidationError("cart", "Cannot submit an empty cart")
        if entity is None:
            raise ValidationError("entity", "Select an entity before submitting")

    @staticmethod
    def build_order(
        cart: Cart,
        entity: Entity | None,
        profile: Profile,
        catalog: Mapping[str, Product] | None = None,
    ) -> Order:
        """
        Snapshot the cart into a new order.

        Unit prices come from the catalog at this moment, falling back to the
        line's own product snapshot.

        Raises:
            ValidationError: Empty cart or no entity selected
        """
        CartEngine.validate_submission(cart, entity)

        catalog = catalog or {}
        items = []
        for line in cart.lines:
            product = catalog.get(line.product_id, line.product)
            items.append(
                OrderItem(
                    product_id=line.product_id,
                    product_name=product.name,
                    quantity=line.quantity,
                    unit_price=product.price,
                )
            )

        return Order(
            id=new_order_id(),
            entity_id=entity.id,
            profile_id=profile.id,
            items=tuple(items),
            created_at=datetime.now(timezone.utc),
            status=OrderStatus.PENDING,
        )

    async def submit(
        self,
        cart: Cart,
        entity: Entity | None,
        profile: Profile,
        catalog: Mapping[str, Product] | None = None,
    ) -> SubmitResult:
        """
        Submit the cart as a new order.

        Args:
            cart: Cart to submit
            entity: Selected entity (captured by value)
            profile: Submitting profile
            catalog: Current product snapshot for price capture

        Returns:
            SubmitResult with the written order and an empty cart

        Raises:
            ValidationError: Empty cart or no entity; nothing is written
            OrderWriteError: Write failed; the caller keeps its cart
        """
        order = self.build_order(cart, entity, profile, catalog)

        logger.info(
            "order_submit_started",
            order_id=order.id,
            entity_id=order.entity_id,
            items=len(order.items),
        )

        try:
            await self._orders.write_order(order)
        except OrderWriteError:
            logger.error("order_write_failed", order_id=order.id)
            raise
        except Exception as e:
            logger.error("order_write_failed", order_id=order.id, error=str(e))
            raise OrderWriteError(order.id, str(e)) from e

        logger.info("order_submitted", order_id=order.id, total=order.total)

        return SubmitResult(order=order, cart=Cart())
