"""Core domain entities."""

from niklaus.core.entities.cart import Cart, CartLine
from niklaus.core.entities.catalog import Entity, Product
from niklaus.core.entities.chat import ChatState, ChatTurn, SupportChat, TurnRole
from niklaus.core.entities.order import Order, OrderItem, OrderStatus
from niklaus.core.entities.profile import (
    DEFAULT_PROFILE_NAME,
    AuthIdentity,
    Profile,
    ProfileSeed,
    UserRole,
)
from niklaus.core.entities.records import (
    COLLECTION_MODELS,
    CollectionKind,
    decode_record,
    decode_snapshot,
    encode_record,
)
from niklaus.core.entities.session import EntitySelection, SessionState, View

__all__ = [
    # Profile entities
    "AuthIdentity",
    "Profile",
    "ProfileSeed",
    "UserRole",
    "DEFAULT_PROFILE_NAME",
    # Catalog entities
    "Entity",
    "Product",
    # Cart entities
    "Cart",
    "CartLine",
    # Order entities
    "Order",
    "OrderItem",
    "OrderStatus",
    # Chat entities
    "ChatState",
    "ChatTurn",
    "SupportChat",
    "TurnRole",
    # Session entities
    "EntitySelection",
    "SessionState",
    "View",
    # Records
    "CollectionKind",
    "COLLECTION_MODELS",
    "decode_record",
    "decode_snapshot",
    "encode_record",
]
