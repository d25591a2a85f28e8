"""
Gemini inference provider implementation.

Hosted text generation for the support assistant via google-generativeai.
"""

import asyncio
import time
from collections.abc import Sequence

import google.generativeai as genai

from niklaus.config import get_logger, get_settings
from niklaus.core.entities.chat import ChatTurn, TurnRole
from niklaus.core.exceptions import ConfigurationError
from niklaus.core.interfaces import HealthStatus
from niklaus.infrastructure.llm.base import BaseInferenceProvider

logger = get_logger(__name__)

# Gemini names the assistant side of a conversation "model"
_ROLE_MAP = {
    TurnRole.USER: "user",
    TurnRole.ASSISTANT: "model",
}


def _normalize_model_name(name: str) -> str:
    name = (name or "").strip()
    return name.removeprefix("models/")


def to_gemini_contents(transcript: Sequence[ChatTurn]) -> list[dict]:
    """Map a transcript onto Gemini content entries."""
    return [{"role": _ROLE_MAP[turn.role], "parts": [{"text": turn.text}]} for turn in transcript]


def _response_text(response) -> str:
    # .text raises ValueError when the candidate was blocked or is empty
    try:
        return response.text or ""
    except ValueError:
        return ""


class GeminiProvider(BaseInferenceProvider):
    """Google Gemini provider."""

    provider_name = "gemini"

    def __init__(self):
        super().__init__()
        settings = get_settings()
        if not settings.inference.api_key:
            raise ConfigurationError("INFERENCE_API_KEY is required for the gemini provider")

        genai.configure(api_key=settings.inference.api_key)
        self.model = _normalize_model_name(settings.inference.model_name)
        self.max_tokens = settings.inference.max_tokens
        self.temperature = settings.inference.temperature
        self._models: dict[str, genai.GenerativeModel] = {}

    def _get_model(self, system_instruction: str) -> genai.GenerativeModel:
        if system_instruction not in self._models:
            self._models[system_instruction] = genai.GenerativeModel(
                self.model,
                system_instruction=system_instruction or None,
            )
        return self._models[system_instruction]

    async def generate(
        self,
        transcript: Sequence[ChatTurn],
        system_instruction: str,
    ) -> str:
        """Reply to the transcript with one generate_content call."""
        contents = to_gemini_contents(transcript)
        model = self._get_model(system_instruction)

        async def _do_generate() -> str:
            start_time = time.time()
            response = await asyncio.wait_for(
                model.generate_content_async(
                    contents,
                    generation_config={
                        "temperature": self.temperature,
                        "max_output_tokens": self.max_tokens,
                    },
                ),
                timeout=self.timeout,
            )
            reply = _response_text(response).strip()

            logger.info(
                "gemini_generate",
                model=self.model,
                turns=len(transcript),
                response_len=len(reply),
                elapsed_ms=int((time.time() - start_time) * 1000),
            )
            return reply

        return await self._with_resilience(_do_generate)

    async def check_health(self) -> HealthStatus:
        """Check that the configured model is reachable."""
        start_time = time.time()

        try:
            info = await asyncio.wait_for(
                asyncio.to_thread(genai.get_model, f"models/{self.model}"),
                timeout=10,
            )
            status = HealthStatus(
                available=True,
                provider="gemini",
                model=getattr(info, "name", self.model),
                response_time_ms=(time.time() - start_time) * 1000,
            )

        except Exception as e:
            status = HealthStatus(
                available=False,
                provider="gemini",
                model=self.model,
                error=str(e),
            )

        self._update_health_cache(status)
        return status


# Singleton
_gemini_provider: GeminiProvider | None = None


def get_gemini_provider() -> GeminiProvider:
    """Get or create the Gemini provider singleton."""
    global _gemini_provider
    if _gemini_provider is None:
        _gemini_provider = GeminiProvider()
    return _gemini_provider
