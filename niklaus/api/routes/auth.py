"""
Sign-in, registration and sign-out endpoints.
"""

from fastapi import APIRouter, Depends

from niklaus.api.dependencies import get_controller, get_session_id
from niklaus.application.dto.requests import RegisterRequest, SignInRequest
from niklaus.application.dto.responses import ErrorResponse, SessionResponse
from niklaus.application.session_controller import AppSessionController

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/sign-in",
    response_model=SessionResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def sign_in(
    request: SignInRequest,
    session_id: str = Depends(get_session_id),
    controller: AppSessionController = Depends(get_controller),
):
    """Sign in; the profile is resolved before this returns."""
    state = await controller.sign_in(request.email, request.password)
    return SessionResponse.from_state(session_id, state, controller.greeting)


@router.post(
    "/register",
    response_model=SessionResponse,
    responses={401: {"model": ErrorResponse, "description": "Registration rejected"}},
)
async def register(
    request: RegisterRequest,
    session_id: str = Depends(get_session_id),
    controller: AppSessionController = Depends(get_controller),
):
    """Create an account and sign in with a seeded profile."""
    state = await controller.register(
        request.email,
        request.password,
        name=request.name,
        category=request.category,
    )
    return SessionResponse.from_state(session_id, state, controller.greeting)


@router.post("/sign-out", response_model=SessionResponse)
async def sign_out(
    session_id: str = Depends(get_session_id),
    controller: AppSessionController = Depends(get_controller),
):
    """Sign out; selection, cart, chat and live subscriptions are dropped."""
    state = await controller.sign_out()
    return SessionResponse.from_state(session_id, state, controller.greeting)
