"""
In-memory live document store.

Holds the shared products, entities and orders collections and pushes a full
snapshot to every subscriber of a collection after each write. Plays the
backend role for all connected sessions of one process.
"""

import asyncio
import copy
from collections.abc import AsyncIterator, Mapping
from typing import Any

from niklaus.config import get_logger
from niklaus.core.entities.catalog import Entity, Product
from niklaus.core.entities.order import Order
from niklaus.core.entities.records import CollectionKind, encode_record
from niklaus.core.exceptions import OrderWriteError
from niklaus.core.interfaces.live import ILiveCollectionFeed, ILiveSubscription, RawSnapshot
from niklaus.core.interfaces.storage import ICatalogAdmin, IOrderWriter

logger = get_logger(__name__)

_CLOSED = object()


class InMemorySubscription(ILiveSubscription):
    """Queue-backed subscription to one collection."""

    def __init__(self, store: "InMemoryLiveStore", kind: CollectionKind):
        self._store = store
        self.kind = kind
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, snapshot: RawSnapshot) -> None:
        if not self._closed:
            self._queue.put_nowait(snapshot)

    async def snapshots(self) -> AsyncIterator[RawSnapshot]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item

    async def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._store._detach(self)
        self._queue.put_nowait(_CLOSED)


class InMemoryLiveStore(ILiveCollectionFeed, IOrderWriter, ICatalogAdmin):
    """
    Shared collections with server-push snapshots.

    Documents are stored raw, exactly as written, so malformed seed data
    reaches subscribers unchanged.
    """

    def __init__(self) -> None:
        self._collections: dict[CollectionKind, dict[str, dict[str, Any]]] = {
            kind: {} for kind in CollectionKind
        }
        self._subscriptions: dict[CollectionKind, list[InMemorySubscription]] = {
            kind: [] for kind in CollectionKind
        }

    # =========================================================================
    # Live feed
    # =========================================================================

    async def subscribe(self, kind: CollectionKind) -> ILiveSubscription:
        subscription = InMemorySubscription(self, kind)
        self._subscriptions[kind].append(subscription)
        subscription.push(self.snapshot(kind))
        logger.debug("live_subscribed", kind=kind.value, subscribers=len(self._subscriptions[kind]))
        return subscription

    def _detach(self, subscription: InMemorySubscription) -> None:
        subscribers = self._subscriptions[subscription.kind]
        if subscription in subscribers:
            subscribers.remove(subscription)
            logger.debug(
                "live_unsubscribed",
                kind=subscription.kind.value,
                subscribers=len(subscribers),
            )

    def subscriber_count(self, kind: CollectionKind) -> int:
        return len(self._subscriptions[kind])

    def snapshot(self, kind: CollectionKind) -> dict[str, dict[str, Any]]:
        """Deep copy of the collection's current documents."""
        return copy.deepcopy(self._collections[kind])

    def _publish(self, kind: CollectionKind) -> None:
        for subscription in list(self._subscriptions[kind]):
            subscription.push(self.snapshot(kind))

    # =========================================================================
    # Raw document access
    # =========================================================================

    def put_document(self, kind: CollectionKind, record_id: str, document: Mapping[str, Any]) -> None:
        self._collections[kind][record_id] = copy.deepcopy(dict(document))
        self._publish(kind)

    def delete_document(self, kind: CollectionKind, record_id: str) -> None:
        if self._collections[kind].pop(record_id, None) is not None:
            self._publish(kind)

    def load(self, kind: CollectionKind, documents: Mapping[str, Mapping[str, Any]]) -> None:
        """Bulk insert documents with a single publish."""
        for record_id, document in documents.items():
            self._collections[kind][record_id] = copy.deepcopy(dict(document))
        self._publish(kind)

    # =========================================================================
    # Writers
    # =========================================================================

    async def write_order(self, order: Order) -> None:
        orders = self._collections[CollectionKind.ORDERS]
        if order.id in orders:
            raise OrderWriteError(order.id, "order already exists")
        self.put_document(CollectionKind.ORDERS, order.id, encode_record(order))
        logger.info("order_stored", order_id=order.id, entity_id=order.entity_id)

    async def upsert_entity(self, entity: Entity) -> None:
        self.put_document(CollectionKind.ENTITIES, entity.id, encode_record(entity))

    async def upsert_product(self, product: Product) -> None:
        self.put_document(CollectionKind.PRODUCTS, product.id, encode_record(product))
