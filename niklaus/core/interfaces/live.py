"""
Abstract interfaces for server-push live collections.

The push transport is opaque: a subscription is just a stream of full
snapshots, each one a mapping of record id to raw document.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from typing import Any

from niklaus.core.entities.records import CollectionKind

RawSnapshot = Mapping[str, Mapping[str, Any]]


class ILiveSubscription(ABC):
    """Open subscription to one collection."""

    @abstractmethod
    def snapshots(self) -> AsyncIterator[RawSnapshot]:
        """
        Stream of full snapshots.

        Each snapshot fully supersedes the previous one. The iterator ends
        after unsubscribe().
        """
        pass

    @abstractmethod
    async def unsubscribe(self) -> None:
        """Stop listening; idempotent."""
        pass


class ILiveCollectionFeed(ABC):
    """
    Abstract interface for the live collection collaborator.

    Implementations: InMemoryLiveStore
    """

    @abstractmethod
    async def subscribe(self, kind: CollectionKind) -> ILiveSubscription:
        """
        Establish a subscription to one collection kind.

        Returns once the subscription is live.
        """
        pass
