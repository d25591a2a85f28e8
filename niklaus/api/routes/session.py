"""
Client session endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from niklaus.api.dependencies import get_controller, get_registry, get_session_id
from niklaus.application.dto.requests import SetViewRequest
from niklaus.application.dto.responses import ErrorResponse, SessionResponse
from niklaus.application.services import SessionRegistry
from niklaus.application.session_controller import AppSessionController

router = APIRouter(prefix="/api/session", tags=["session"])


@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    registry: SessionRegistry = Depends(get_registry),
):
    """Open a client session; send the returned id as X-Session-ID."""
    session_id, controller = await registry.create()
    return SessionResponse.from_state(session_id, controller.state, controller.greeting)


@router.get(
    "",
    response_model=SessionResponse,
    responses={404: {"model": ErrorResponse, "description": "Session not found"}},
)
async def get_session(
    session_id: str = Depends(get_session_id),
    controller: AppSessionController = Depends(get_controller),
):
    """Current session state."""
    return SessionResponse.from_state(session_id, controller.state, controller.greeting)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(
    session_id: str = Depends(get_session_id),
    registry: SessionRegistry = Depends(get_registry),
):
    """Close the session and release its subscriptions."""
    if not await registry.close(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/view",
    response_model=SessionResponse,
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
async def set_view(
    request: SetViewRequest,
    session_id: str = Depends(get_session_id),
    controller: AppSessionController = Depends(get_controller),
):
    """Switch the current page."""
    state = controller.set_view(request.view)
    return SessionResponse.from_state(session_id, state, controller.greeting)
