"""Unit tests for EntityAccessGuard."""

from datetime import datetime, timedelta, timezone

import pytest

from niklaus.core.entities import Entity, EntitySelection, Order, OrderItem
from niklaus.core.exceptions import AccessDenied
from niklaus.core.services.access_guard import EntityAccessGuard


@pytest.fixture
def entity_c() -> Entity:
    return Entity(id="C", name="alfa minúsculo", cnpj="33")


@pytest.fixture
def all_entities(entity_a, entity_b, entity_c) -> list[Entity]:
    return [entity_b, entity_c, entity_a]


def _order(order_id: str, entity_id: str, minutes_ago: int) -> Order:
    return Order(
        id=order_id,
        entity_id=entity_id,
        profile_id="u1",
        items=(OrderItem(product_id="X", quantity=1, unit_price=1.0),),
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc) - timedelta(minutes=minutes_ago),
    )


class TestVisibleEntities:
    """Tests for visible_entities."""

    def test_representative_sees_authorized_only(self, rep_profile, all_entities):
        visible = EntityAccessGuard.visible_entities(rep_profile, all_entities)
        assert [e.id for e in visible] == ["A"]

    def test_admin_sees_all_sorted_by_name(self, admin_profile, all_entities):
        visible = EntityAccessGuard.visible_entities(admin_profile, all_entities)
        assert [e.id for e in visible] == ["A", "C", "B"]

    def test_authorized_id_missing_from_feed(self, rep_profile, entity_b):
        """Should not invent entities the feed does not carry."""
        assert EntityAccessGuard.visible_entities(rep_profile, [entity_b]) == []


class TestSelectEntity:
    """Tests for select_entity."""

    def test_selects_visible(self, entity_a):
        assert EntityAccessGuard.select_entity("A", [entity_a]) == entity_a

    def test_rejects_invisible_without_substitution(self, entity_a):
        with pytest.raises(AccessDenied) as exc_info:
            EntityAccessGuard.select_entity("B", [entity_a])
        assert exc_info.value.details["resource_id"] == "B"

    def test_representative_scenario(self, rep_profile, all_entities):
        """Representative authorized for {A}: sees [A] and is denied B."""
        visible = EntityAccessGuard.visible_entities(rep_profile, all_entities)
        assert [e.id for e in visible] == ["A"]
        with pytest.raises(AccessDenied):
            EntityAccessGuard.select_entity("B", visible)


class TestSelectionTransitions:
    """Tests for choose/open_chooser/refresh."""

    def test_choose_closes_chooser(self, entity_a):
        selection = EntityAccessGuard.choose(entity_a)
        assert selection.selected == entity_a
        assert not selection.chooser_open

    def test_open_chooser_keeps_selection(self, entity_a):
        selection = EntityAccessGuard.open_chooser(EntityAccessGuard.choose(entity_a))
        assert selection.chooser_open
        assert selection.selected == entity_a

    def test_refresh_replaces_with_latest(self, entity_a):
        renamed = entity_a.model_copy(update={"trade_name": "Alfa"})
        selection = EntityAccessGuard.refresh(EntitySelection(selected=entity_a), [renamed])
        assert selection.selected.trade_name == "Alfa"

    def test_refresh_unchanged_returns_same(self, entity_a):
        selection = EntitySelection(selected=entity_a)
        assert EntityAccessGuard.refresh(selection, [entity_a]) is selection

    def test_refresh_clears_vanished(self, entity_a, entity_b):
        selection = EntityAccessGuard.refresh(EntitySelection(selected=entity_a), [entity_b])
        assert selection.selected is None
        assert selection.needs_selection


class TestVisibleOrders:
    """Tests for visible_orders."""

    @pytest.fixture
    def orders(self) -> dict[str, Order]:
        orders = [_order("O1", "A", 30), _order("O2", "B", 20), _order("O3", "A", 10)]
        return {o.id: o for o in orders}

    def test_representative_sees_own_entities_newest_first(self, rep_profile, orders):
        history = EntityAccessGuard.visible_orders(rep_profile, orders)
        assert [o.id for o in history] == ["O3", "O1"]

    def test_admin_sees_everything(self, admin_profile, orders):
        history = EntityAccessGuard.visible_orders(admin_profile, orders)
        assert [o.id for o in history] == ["O3", "O2", "O1"]

    def test_entity_filter(self, admin_profile, orders):
        history = EntityAccessGuard.visible_orders(admin_profile, orders.values(), entity_id="B")
        assert [o.id for o in history] == ["O2"]
