"""
Dependency injection container for FastAPI.

Provides the client session's controller to route handlers.
"""

from fastapi import Depends, Header, HTTPException, status

from niklaus.application.services import SessionRegistry, get_session_registry
from niklaus.application.session_controller import AppSessionController


def get_registry() -> SessionRegistry:
    """Get the client session registry."""
    return get_session_registry()


def get_session_id(
    x_session_id: str | None = Header(default=None, alias="X-Session-ID"),
) -> str:
    """Read the client session id header."""
    if not x_session_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing X-Session-ID header",
        )
    return x_session_id


def get_controller(
    session_id: str = Depends(get_session_id),
    registry: SessionRegistry = Depends(get_registry),
) -> AppSessionController:
    """Resolve the controller for the calling client."""
    controller = registry.get(session_id)
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}",
        )
    return controller
