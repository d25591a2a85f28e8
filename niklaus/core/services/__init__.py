"""
Core business logic services.

Layer-pure services that depend only on:
- niklaus/core/entities/*
- niklaus/core/interfaces/*
- niklaus/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from niklaus.core.services.access_guard import EntityAccessGuard
from niklaus.core.services.cart_engine import CartEngine, SubmitResult, new_order_id
from niklaus.core.services.identity_resolver import IdentityResolver
from niklaus.core.services.live_sync import LiveCollectionSync, SnapshotCell
from niklaus.core.services.support_chat import SupportChatSession

__all__ = [
    # Identity
    "IdentityResolver",
    # Live collections
    "LiveCollectionSync",
    "SnapshotCell",
    # Authorization
    "EntityAccessGuard",
    # Cart
    "CartEngine",
    "SubmitResult",
    "new_order_id",
    # Support chat
    "SupportChatSession",
]
