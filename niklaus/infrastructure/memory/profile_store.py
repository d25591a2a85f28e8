"""
In-memory profile store.
"""

import copy
from typing import Any

from niklaus.core.entities.profile import Profile
from niklaus.core.entities.records import encode_record
from niklaus.core.interfaces.storage import IProfileStore


class InMemoryProfileStore(IProfileStore):
    """Profile documents keyed by identity id."""

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None):
        self._documents: dict[str, dict[str, Any]] = dict(documents or {})

    async def read_profile(self, profile_id: str) -> dict[str, Any] | None:
        document = self._documents.get(profile_id)
        return copy.deepcopy(document) if document is not None else None

    async def write_profile(self, profile: Profile) -> None:
        self._documents[profile.id] = encode_record(profile)

    def put_document(self, profile_id: str, document: dict[str, Any]) -> None:
        """Store a raw document as-is (seeding and tests)."""
        self._documents[profile_id] = copy.deepcopy(document)
