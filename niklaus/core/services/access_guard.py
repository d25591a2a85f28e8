"""
Entity-scoped authorization.

Decides which legal-entity accounts a profile may act as and guards the
entity selection flow.
"""

from collections.abc import Iterable, Mapping

from niklaus.config import get_logger
from niklaus.core.entities.catalog import Entity
from niklaus.core.entities.order import Order
from niklaus.core.entities.profile import Profile
from niklaus.core.entities.session import EntitySelection
from niklaus.core.exceptions import AccessDenied

logger = get_logger(__name__)


class EntityAccessGuard:
    """Authorization rules for entity selection and order history."""

    @staticmethod
    def visible_entities(profile: Profile, all_entities: Iterable[Entity]) -> list[Entity]:
        """
        Entities the profile may select, ordered by name.

        ADMIN sees everything; anyone else sees exactly the live entities
        whose id is in the profile's authorized set.
        """
        if profile.is_admin:
            visible = list(all_entities)
        else:
            visible = [e for e in all_entities if e.id in profile.entity_ids]
        return sorted(visible, key=lambda e: (e.name.casefold(), e.id))

    @staticmethod
    def select_entity(candidate_id: str, visible: Iterable[Entity]) -> Entity:
        """
        Resolve a selection against the visible set.

        Raises:
            AccessDenied: candidate is not visible (never substituted)
        """
        for entity in visible:
            if entity.id == candidate_id:
                return entity
        logger.warning("entity_selection_denied", entity_id=candidate_id)
        raise AccessDenied("entity", candidate_id)

    @staticmethod
    def choose(entity: Entity) -> EntitySelection:
        """Apply an accepted selection and close the chooser."""
        return EntitySelection(selected=entity, chooser_open=False)

    @staticmethod
    def open_chooser(selection: EntitySelection) -> EntitySelection:
        """Reopen the chooser, keeping the current selection."""
        return selection.model_copy(update={"chooser_open": True})

    @staticmethod
    def refresh(selection: EntitySelection, visible: Iterable[Entity]) -> EntitySelection:
        """
        Re-resolve the selection against a new entity snapshot.

        The selected record is replaced by its latest version; a selection
        that is no longer visible is cleared, which reopens the chooser.
        """
        current = selection.selected
        if current is None:
            return selection

        for entity in visible:
            if entity.id == current.id:
                if entity == current:
                    return selection
                return selection.model_copy(update={"selected": entity})

        logger.info("entity_selection_revoked", entity_id=current.id)
        return selection.model_copy(update={"selected": None})

    @staticmethod
    def visible_orders(
        profile: Profile,
        orders: Mapping[str, Order] | Iterable[Order],
        entity_id: str | None = None,
    ) -> list[Order]:
        """
        Order history for the profile, newest first.

        ADMIN sees all orders; others see orders for their authorized
        entities. `entity_id` narrows the history to one entity.
        """
        items = orders.values() if isinstance(orders, Mapping) else orders
        result = [
            o
            for o in items
            if (profile.is_admin or o.entity_id in profile.entity_ids)
            and (entity_id is None or o.entity_id == entity_id)
        ]
        return sorted(result, key=lambda o: o.created_at, reverse=True)
