"""
Entity (CNPJ) selection endpoints.
"""

from fastapi import APIRouter, Depends

from niklaus.api.dependencies import get_controller, get_session_id
from niklaus.application.dto.requests import SelectEntityRequest
from niklaus.application.dto.responses import EntityResponse, ErrorResponse, SessionResponse
from niklaus.application.session_controller import AppSessionController

router = APIRouter(prefix="/api/entities", tags=["entities"])


@router.get("", response_model=list[EntityResponse])
async def list_entities(
    controller: AppSessionController = Depends(get_controller),
):
    """Entities the signed-in profile may act as, ordered by name."""
    return [EntityResponse.from_entity(e) for e in controller.visible_entities()]


@router.post(
    "/select",
    response_model=SessionResponse,
    responses={403: {"model": ErrorResponse, "description": "Entity not authorized"}},
)
async def select_entity(
    request: SelectEntityRequest,
    session_id: str = Depends(get_session_id),
    controller: AppSessionController = Depends(get_controller),
):
    """Select the entity to act as."""
    state = controller.select_entity(request.entity_id)
    return SessionResponse.from_state(session_id, state, controller.greeting)


@router.post("/chooser", response_model=SessionResponse)
async def open_chooser(
    session_id: str = Depends(get_session_id),
    controller: AppSessionController = Depends(get_controller),
):
    """Reopen the entity chooser; the cart is kept."""
    state = controller.open_entity_chooser()
    return SessionResponse.from_state(session_id, state, controller.greeting)
