"""
Abstract interface for the support assistant inference service.

Defines the contract that Gemini and Ollama implementations must fulfill.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from niklaus.core.entities.chat import ChatTurn


class InferenceProviderType(str, Enum):
    """Supported inference provider types."""

    GEMINI = "gemini"
    OLLAMA = "ollama"


@dataclass
class HealthStatus:
    """Inference provider health status."""

    available: bool
    provider: str
    model: str | None = None
    error: str | None = None
    response_time_ms: float | None = None


class IInferenceProvider(ABC):
    """
    Abstract interface for inference providers.

    Implementations: GeminiProvider, OllamaProvider
    """

    @abstractmethod
    async def generate(
        self,
        transcript: Sequence[ChatTurn],
        system_instruction: str,
    ) -> str:
        """
        Single-shot reply to a conversation.

        Args:
            transcript: Full ordered transcript, ending with the new user turn
            system_instruction: Fixed assistant role/language/domain prompt

        Returns:
            Reply text, possibly empty

        Raises:
            InferenceError: Transport or service failure
        """
        pass

    @abstractmethod
    async def check_health(self) -> HealthStatus:
        """
        Check if the provider is available.

        Returns:
            HealthStatus with availability info
        """
        pass
