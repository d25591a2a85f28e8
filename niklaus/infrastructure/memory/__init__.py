"""In-memory collaborator implementations."""

from niklaus.infrastructure.memory.auth import AccountDirectory, InMemoryAuthProvider
from niklaus.infrastructure.memory.live_store import InMemoryLiveStore, InMemorySubscription
from niklaus.infrastructure.memory.profile_store import InMemoryProfileStore
from niklaus.infrastructure.memory.seed import load_seed_file, seed_backend

__all__ = [
    "AccountDirectory",
    "InMemoryAuthProvider",
    "InMemoryProfileStore",
    "InMemoryLiveStore",
    "InMemorySubscription",
    "load_seed_file",
    "seed_backend",
]
