"""
Support chat turn-taking.

Drives an append-only transcript against the inference service with at most
one request in flight. Inference failures never escape: they become a fixed
apology turn and the user resubmits.
"""

from niklaus.config import get_logger, get_settings
from niklaus.core.entities.chat import ChatState, SupportChat, TurnRole
from niklaus.core.exceptions import InferenceError, ValidationError
from niklaus.core.interfaces.inference import IInferenceProvider

logger = get_logger(__name__)


class SupportChatSession:
    """
    Support conversation state machine.

    idle --accept--> awaiting_response --complete/fail--> idle
    """

    def __init__(
        self,
        inference: IInferenceProvider,
        system_instruction: str | None = None,
        empty_reply_text: str | None = None,
        failure_text: str | None = None,
    ):
        support = get_settings().support
        self._inference = inference
        self.system_instruction = system_instruction or support.system_instruction
        self.empty_reply_text = empty_reply_text or support.empty_reply_text
        self.failure_text = failure_text or support.failure_text

    @staticmethod
    def accept(chat: SupportChat, text: str) -> SupportChat:
        """
        Append the user turn and start waiting for the reply.

        Raises:
            ValidationError: Blank text, or a reply is still pending
        """
        if not text or not text.strip():
            raise ValidationError("text", "Message cannot be empty")
        if chat.is_awaiting:
            raise ValidationError("text", "Wait for the current reply before sending another message")

        return chat.append(TurnRole.USER, text).with_state(ChatState.AWAITING_RESPONSE)

    def complete(self, chat: SupportChat, reply: str | None) -> SupportChat:
        """Append the assistant reply (or the empty-reply fallback)."""
        text = reply if reply and reply.strip() else self.empty_reply_text
        return chat.append(TurnRole.ASSISTANT, text).with_state(ChatState.IDLE)

    def fail(self, chat: SupportChat) -> SupportChat:
        """Append the apology turn after a failed inference call."""
        return chat.append(TurnRole.ASSISTANT, self.failure_text).with_state(ChatState.IDLE)

    async def respond(self, chat: SupportChat) -> SupportChat:
        """
        Issue exactly one inference call for an accepted chat.

        Args:
            chat: Chat returned by accept(), ending with the user turn

        Returns:
            Chat with one assistant turn appended, back to idle
        """
        try:
            reply = await self._inference.generate(chat.turns, self.system_instruction)

        except InferenceError as e:
            logger.warning("inference_failed", code=e.code, error=e.message, turns=len(chat.turns))
            return self.fail(chat)

        except Exception as e:
            logger.error("inference_failed", error=str(e), error_type=type(e).__name__)
            return self.fail(chat)

        logger.info("inference_replied", turns=len(chat.turns), reply_length=len(reply or ""))
        return self.complete(chat, reply)

    async def submit(self, chat: SupportChat, text: str) -> SupportChat:
        """Accept a message and wait for its reply."""
        return await self.respond(self.accept(chat, text))
