"""
Abstract interfaces for store collaborators.

Defines contracts for the profile store, the order writer, and the
backoffice catalog writes.
"""

from abc import ABC, abstractmethod
from typing import Any

from niklaus.core.entities.catalog import Entity, Product
from niklaus.core.entities.order import Order
from niklaus.core.entities.profile import Profile


class IProfileStore(ABC):
    """
    Abstract interface for profile storage.

    Documents come back raw; the caller decodes them.
    """

    @abstractmethod
    async def read_profile(self, profile_id: str) -> dict[str, Any] | None:
        """
        Get stored profile document by ID.

        Raises:
            ProfileStoreError: Store unreachable
        """
        pass

    @abstractmethod
    async def write_profile(self, profile: Profile) -> None:
        """
        Create or replace a profile document.

        Raises:
            ProfileStoreError: Write failed
        """
        pass


class IOrderWriter(ABC):
    """Abstract interface for submitting orders."""

    @abstractmethod
    async def write_order(self, order: Order) -> None:
        """
        Persist a new order under its own id.

        Raises:
            OrderWriteError: Write failed
        """
        pass


class ICatalogAdmin(ABC):
    """Abstract interface for backoffice pass-through writes."""

    @abstractmethod
    async def upsert_entity(self, entity: Entity) -> None:
        """Create or replace an entity account."""
        pass

    @abstractmethod
    async def upsert_product(self, product: Product) -> None:
        """Create or replace a product."""
        pass
