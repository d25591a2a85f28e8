"""
Service factory functions for dependency injection.

Wires infrastructure implementations to session controllers and keeps the
per-client session registry.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import uuid4

from niklaus.application.session_controller import AppSessionController
from niklaus.config import get_logger, get_settings

if TYPE_CHECKING:
    from niklaus.core.interfaces import IInferenceProvider
    from niklaus.infrastructure.memory import (
        AccountDirectory,
        InMemoryLiveStore,
        InMemoryProfileStore,
    )

logger = get_logger(__name__)


@dataclass
class Backend:
    """Collaborators shared by every session in the process."""

    accounts: "AccountDirectory"
    profiles: "InMemoryProfileStore"
    live_store: "InMemoryLiveStore"
    inference: "IInferenceProvider"


class SessionRegistry:
    """
    Client sessions keyed by session id.

    Least recently used sessions are closed once `max_sessions` is exceeded.
    """

    def __init__(self, factory: Callable[[], AppSessionController], max_sessions: int = 500):
        self._factory = factory
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, AppSessionController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    async def create(self) -> tuple[str, AppSessionController]:
        session_id = uuid4().hex
        controller = self._factory()
        self._sessions[session_id] = controller

        while len(self._sessions) > self._max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            await evicted.close()
            logger.info("session_evicted", session_id=evicted_id)

        logger.info("session_created", session_id=session_id, sessions=len(self._sessions))
        return session_id, controller

    def get(self, session_id: str) -> AppSessionController | None:
        controller = self._sessions.get(session_id)
        if controller is not None:
            self._sessions.move_to_end(session_id)
        return controller

    async def close(self, session_id: str) -> bool:
        controller = self._sessions.pop(session_id, None)
        if controller is None:
            return False
        await controller.close()
        logger.info("session_closed", session_id=session_id)
        return True

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            await self.close(session_id)


# Singleton instances
_backend: Backend | None = None
_session_registry: SessionRegistry | None = None


def get_backend(inference: "IInferenceProvider | None" = None) -> Backend:
    """
    Get or create the shared in-memory backend.

    Seeds accounts and collections from STORE_SEED_PATH when set.

    Args:
        inference: Optional inference provider override

    Returns:
        Configured Backend
    """
    global _backend

    if _backend is not None and inference is None:
        return _backend

    # Lazy import infrastructure to avoid circular imports
    from niklaus.infrastructure.llm import get_inference_provider
    from niklaus.infrastructure.memory import (
        AccountDirectory,
        InMemoryLiveStore,
        InMemoryProfileStore,
        load_seed_file,
        seed_backend,
    )

    backend = Backend(
        accounts=AccountDirectory(),
        profiles=InMemoryProfileStore(),
        live_store=InMemoryLiveStore(),
        inference=inference or get_inference_provider(),
    )

    seed_path = get_settings().store.seed_path
    if seed_path is not None:
        seed_backend(load_seed_file(seed_path), backend.accounts, backend.profiles, backend.live_store)

    _backend = backend
    return _backend


def create_session_controller(backend: Backend | None = None) -> AppSessionController:
    """Build a controller bound to its own auth state over the shared backend."""
    from niklaus.infrastructure.memory import InMemoryAuthProvider

    backend = backend or get_backend()
    return AppSessionController(
        auth=InMemoryAuthProvider(backend.accounts),
        profile_store=backend.profiles,
        feed=backend.live_store,
        order_writer=backend.live_store,
        inference=backend.inference,
        catalog_admin=backend.live_store,
    )


def get_session_registry() -> SessionRegistry:
    """Get or create the session registry."""
    global _session_registry

    if _session_registry is None:
        _session_registry = SessionRegistry(
            factory=create_session_controller,
            max_sessions=get_settings().api.max_sessions,
        )
    return _session_registry


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _backend
    global _session_registry

    _backend = None
    _session_registry = None


__all__ = [
    "Backend",
    "SessionRegistry",
    "get_backend",
    "create_session_controller",
    "get_session_registry",
    "reset_services",
]
