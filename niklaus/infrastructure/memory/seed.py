"""
Startup seeding of the in-memory backend.

Seed file layout (JSON):

    {
      "accounts": [
        {"email": "...", "password": "...", "uid": "u1",
         "profile": {"name": "...", "role": "ADMIN", "cnpjs": ["e1"]}}
      ],
      "entities": {"e1": {...}},
      "products": {"p1": {...}},
      "orders": {}
    }

Documents are loaded raw; they are validated when sessions decode them.
"""

import json
from pathlib import Path
from typing import Any

from niklaus.config import get_logger
from niklaus.core.entities.records import CollectionKind
from niklaus.core.exceptions import ConfigurationError
from niklaus.infrastructure.memory.auth import AccountDirectory
from niklaus.infrastructure.memory.live_store import InMemoryLiveStore
from niklaus.infrastructure.memory.profile_store import InMemoryProfileStore

logger = get_logger(__name__)


def load_seed_file(path: Path) -> dict[str, Any]:
    """Read and parse a seed file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read seed file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Seed file {path} must contain a JSON object")
    return data


def seed_backend(
    data: dict[str, Any],
    directory: AccountDirectory,
    profiles: InMemoryProfileStore,
    live_store: InMemoryLiveStore,
) -> None:
    """Populate accounts, profiles and live collections from seed data."""
    for account_data in data.get("accounts", []):
        account = directory.create(
            account_data["email"],
            account_data["password"],
            display_name=account_data.get("display_name"),
            uid=account_data.get("uid"),
        )
        profile = account_data.get("profile")
        if profile is not None:
            profiles.put_document(account.uid, {"email": account.email, **profile})

    for kind in CollectionKind:
        documents = data.get(kind.value)
        if documents:
            live_store.load(kind, documents)

    logger.info(
        "backend_seeded",
        accounts=len(data.get("accounts", [])),
        **{kind.value: len(data.get(kind.value) or {}) for kind in CollectionKind},
    )
