"""
Support assistant chat endpoints.
"""

from fastapi import APIRouter, Depends

from niklaus.api.dependencies import get_controller
from niklaus.application.dto.requests import SupportMessageRequest
from niklaus.application.dto.responses import ErrorResponse, SupportChatResponse
from niklaus.application.session_controller import AppSessionController

router = APIRouter(prefix="/api/support", tags=["support"])


@router.get("", response_model=SupportChatResponse)
async def get_chat(
    controller: AppSessionController = Depends(get_controller),
):
    """Support transcript."""
    return SupportChatResponse.from_chat(controller.state.chat, controller.greeting)


@router.post(
    "/messages",
    response_model=SupportChatResponse,
    responses={400: {"model": ErrorResponse, "description": "Blank message or reply pending"}},
)
async def send_message(
    request: SupportMessageRequest,
    controller: AppSessionController = Depends(get_controller),
):
    """
    Send a message and wait for the assistant.

    Assistant failures come back as an apology turn, not an error.
    """
    chat = await controller.send_support_message(request.text)
    return SupportChatResponse.from_chat(chat, controller.greeting)
