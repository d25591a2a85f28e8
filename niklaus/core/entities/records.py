"""
Strict decoding of store documents into domain entities.

Stores and live feeds hand over loosely shaped documents keyed by id. Every
document is validated against its entity schema; shape mismatches raise
DecodeError instead of leaking half-typed records into the session.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from niklaus.core.entities.catalog import Entity, Product
from niklaus.core.entities.order import Order
from niklaus.core.exceptions import DecodeError

T = TypeVar("T", bound=BaseModel)


class CollectionKind(str, Enum):
    """Live collections the session subscribes to."""

    PRODUCTS = "products"
    ENTITIES = "entities"
    ORDERS = "orders"


COLLECTION_MODELS: dict[CollectionKind, type[BaseModel]] = {
    CollectionKind.PRODUCTS: Product,
    CollectionKind.ENTITIES: Entity,
    CollectionKind.ORDERS: Order,
}


def decode_record(model: type[T], record_id: str | None, data: Any) -> T:
    """
    Validate one document.

    The store key is authoritative for the id: it overrides any "id" field
    inside the document.
    """
    if not isinstance(data, Mapping):
        raise DecodeError(model.__name__, record_id, f"expected a mapping, got {type(data).__name__}")

    payload = dict(data)
    if record_id is not None:
        payload["id"] = record_id

    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        reasons = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        raise DecodeError(model.__name__, record_id, reasons) from e


def decode_snapshot(model: type[T], raw: Mapping[str, Any]) -> dict[str, T]:
    """Validate a full snapshot; any bad record rejects the whole snapshot."""
    return {record_id: decode_record(model, record_id, data) for record_id, data in raw.items()}


def encode_record(record: BaseModel) -> dict[str, Any]:
    """Serialize an entity into a store document."""
    return record.model_dump(mode="json")
