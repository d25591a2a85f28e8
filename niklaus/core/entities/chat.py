"""
Support chat domain entities.

The transcript is append-only and strictly ordered by submission.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TurnRole(str, Enum):
    """Turn author."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatState(str, Enum):
    """Turn-taking state of the support chat."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class ChatTurn(BaseModel):
    """Single message in the support transcript."""

    model_config = ConfigDict(frozen=True)

    role: TurnRole
    text: str
    position: int = Field(..., ge=0)


class SupportChat(BaseModel):
    """Support conversation: ordered turns plus turn-taking state."""

    model_config = ConfigDict(frozen=True)

    turns: tuple[ChatTurn, ...] = ()
    state: ChatState = ChatState.IDLE

    @property
    def is_awaiting(self) -> bool:
        return self.state == ChatState.AWAITING_RESPONSE

    def append(self, role: TurnRole, text: str) -> "SupportChat":
        """Return a copy with one more turn at the next position."""
        turn = ChatTurn(role=role, text=text, position=len(self.turns))
        return self.model_copy(update={"turns": self.turns + (turn,)})

    def with_state(self, state: ChatState) -> "SupportChat":
        return self.model_copy(update={"state": state})
