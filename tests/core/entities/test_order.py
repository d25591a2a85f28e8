"""Tests for order entities."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from niklaus.core.entities import Order, OrderItem, OrderStatus


def _item(**overrides) -> OrderItem:
    data = {"product_id": "X", "product_name": "Caixa", "quantity": 2, "unit_price": 10.0}
    data.update(overrides)
    return OrderItem(**data)


class TestOrder:
    """Tests for Order."""

    def test_created_pending(self):
        order = Order(id="O1", entity_id="A", profile_id="u1", items=(_item(),))
        assert order.status == OrderStatus.PENDING
        assert order.created_at.tzinfo is not None

    def test_total(self):
        order = Order(
            id="O1",
            entity_id="A",
            profile_id="u1",
            items=(_item(), _item(product_id="Y", quantity=1, unit_price=2.5)),
        )
        assert order.total == pytest.approx(22.5)

    def test_requires_items(self):
        with pytest.raises(PydanticValidationError):
            Order(id="O1", entity_id="A", profile_id="u1", items=())

    def test_naive_timestamp_treated_as_utc(self):
        order = Order(
            id="O1",
            entity_id="A",
            profile_id="u1",
            items=(_item(),),
            created_at=datetime(2024, 5, 1, 12, 0),
        )
        assert order.created_at == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def test_status_from_string(self):
        order = Order.model_validate(
            {
                "id": "O1",
                "entity_id": "A",
                "profile_id": "u1",
                "items": [{"product_id": "X", "quantity": 1, "unit_price": 1}],
                "status": "SHIPPED",
            }
        )
        assert order.status == OrderStatus.SHIPPED

    def test_item_quantity_positive(self):
        with pytest.raises(PydanticValidationError):
            _item(quantity=0)
