"""
Live collection synchronization.

Keeps products, entities and orders in sync with their server-push feeds.
Each collection has one writer (its consumer task) and any number of readers;
readers always see the latest complete snapshot, never a partial one.
"""

import asyncio
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from niklaus.config import get_logger
from niklaus.core.entities.catalog import Entity, Product
from niklaus.core.entities.order import Order
from niklaus.core.entities.records import COLLECTION_MODELS, CollectionKind, decode_snapshot
from niklaus.core.exceptions import DecodeError
from niklaus.core.interfaces.live import ILiveCollectionFeed, ILiveSubscription

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

SnapshotListener = Callable[[CollectionKind, Mapping[str, Any]], None]


class SnapshotCell(Generic[T]):
    """Immutable-snapshot cell for one collection kind."""

    def __init__(self, kind: CollectionKind, model: type[T]):
        self.kind = kind
        self.model = model
        self._records: Mapping[str, T] = MappingProxyType({})
        self._version = 0
        self._changed = asyncio.Event()

    @property
    def records(self) -> Mapping[str, T]:
        return self._records

    @property
    def version(self) -> int:
        return self._version

    def replace(self, records: Mapping[str, T]) -> int:
        """Swap in a new snapshot and wake waiters."""
        self._records = MappingProxyType(dict(records))
        self._version += 1
        changed, self._changed = self._changed, asyncio.Event()
        changed.set()
        return self._version

    def reset(self) -> None:
        self.replace({})

    async def wait_newer(self, version: int) -> Mapping[str, T]:
        """Wait until the cell holds a snapshot newer than `version`."""
        while self._version <= version:
            await self._changed.wait()
        return self._records


class LiveCollectionSync:
    """
    Subscription manager for the three live collections.

    Features:
    - Subscriptions start together and stop together
    - Strict decode of every snapshot (bad snapshots are dropped)
    - Change listeners and awaitable versions for readers
    """

    def __init__(self, feed: ILiveCollectionFeed):
        self._feed = feed
        self._cells: dict[CollectionKind, SnapshotCell[Any]] = {
            kind: SnapshotCell(kind, COLLECTION_MODELS[kind]) for kind in CollectionKind
        }
        self._subscriptions: dict[CollectionKind, ILiveSubscription] = {}
        self._tasks: dict[CollectionKind, asyncio.Task[None]] = {}
        self._listeners: list[SnapshotListener] = []
        self._generation = 0

    @property
    def is_running(self) -> bool:
        return bool(self._subscriptions)

    @property
    def products(self) -> Mapping[str, Product]:
        return self._cells[CollectionKind.PRODUCTS].records

    @property
    def entities(self) -> Mapping[str, Entity]:
        return self._cells[CollectionKind.ENTITIES].records

    @property
    def orders(self) -> Mapping[str, Order]:
        return self._cells[CollectionKind.ORDERS].records

    def snapshot(self, kind: CollectionKind) -> Mapping[str, Any]:
        return self._cells[kind].records

    def version(self, kind: CollectionKind) -> int:
        return self._cells[kind].version

    async def wait_for_version(self, kind: CollectionKind, version: int) -> Mapping[str, Any]:
        """Wait for a snapshot of `kind` newer than `version`."""
        return await self._cells[kind].wait_newer(version)

    def on_change(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a listener called after every applied snapshot.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    async def start(self) -> None:
        """
        Subscribe to all three collections.

        Either every subscription is established or none is kept.
        """
        if self.is_running:
            return

        kinds = list(CollectionKind)
        results = await asyncio.gather(
            *(self._feed.subscribe(kind) for kind in kinds),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            for result in results:
                if not isinstance(result, BaseException):
                    await result.unsubscribe()
            logger.error("live_sync_start_failed", error=str(failures[0]))
            raise failures[0]

        self._generation += 1
        for kind, subscription in zip(kinds, results):
            self._subscriptions[kind] = subscription
            self._tasks[kind] = asyncio.create_task(
                self._consume(kind, subscription, self._generation),
                name=f"live-sync-{kind.value}",
            )

        logger.info("live_sync_started", kinds=[k.value for k in kinds])

    async def stop(self) -> None:
        """Cancel consumers, unsubscribe all feeds and drop the snapshots."""
        if not self.is_running:
            return

        self._generation += 1
        tasks = list(self._tasks.values())
        subscriptions = list(self._subscriptions.items())
        self._tasks.clear()
        self._subscriptions.clear()

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        for kind, subscription in subscriptions:
            try:
                await subscription.unsubscribe()
            except Exception as e:
                logger.warning("live_unsubscribe_failed", kind=kind.value, error=str(e))

        for cell in self._cells.values():
            cell.reset()

        logger.info("live_sync_stopped")

    async def _consume(
        self,
        kind: CollectionKind,
        subscription: ILiveSubscription,
        generation: int,
    ) -> None:
        """Apply every snapshot delivered by one subscription."""
        cell = self._cells[kind]

        try:
            async for raw in subscription.snapshots():
                if generation != self._generation:
                    break

                try:
                    records = decode_snapshot(cell.model, raw)
                except DecodeError as e:
                    logger.warning(
                        "snapshot_rejected",
                        kind=kind.value,
                        record_id=e.details.get("record_id"),
                        error=e.message,
                    )
                    continue

                version = cell.replace(records)
                logger.debug("snapshot_applied", kind=kind.value, records=len(records), version=version)
                self._notify(kind, cell.records)

        except asyncio.CancelledError:
            raise

        except Exception as e:
            logger.error("live_feed_failed", kind=kind.value, error=str(e), error_type=type(e).__name__)

    def _notify(self, kind: CollectionKind, records: Mapping[str, Any]) -> None:
        for listener in list(self._listeners):
            try:
                listener(kind, records)
            except Exception as e:
                logger.error("snapshot_listener_failed", kind=kind.value, error=str(e))
