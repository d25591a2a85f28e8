"""
Ollama inference provider implementation.

Local alternative to Gemini for development, using the Ollama chat API.
"""

import time
from collections.abc import Sequence

import httpx

from niklaus.config import get_logger, get_settings
from niklaus.core.entities.chat import ChatTurn
from niklaus.core.exceptions import InferenceUnavailableError
from niklaus.core.interfaces import HealthStatus
from niklaus.infrastructure.llm.base import BaseInferenceProvider, format_transcript

logger = get_logger(__name__)


class OllamaProvider(BaseInferenceProvider):
    """Ollama HTTP API provider."""

    provider_name = "ollama"

    def __init__(self):
        super().__init__()
        settings = get_settings()
        self.host = settings.inference.host.rstrip("/")
        self.model = settings.inference.model_name
        self.max_tokens = settings.inference.max_tokens
        self.temperature = settings.inference.temperature

    async def _make_request(self, endpoint: str, payload: dict) -> dict:
        """Make HTTP request to Ollama API."""
        url = f"{self.host}/{endpoint}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout + 5) as client:
                response = await client.post(url, json=payload, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise TimeoutError(str(e)) from e
        except httpx.TransportError as e:
            raise ConnectionError(str(e)) from e

        if response.status_code == 404:
            raise InferenceUnavailableError("ollama", f"Model '{self.model}' not found")

        if response.status_code != 200:
            error_text = response.text[:200]
            raise InferenceUnavailableError("ollama", f"HTTP {response.status_code}: {error_text}")

        return response.json()

    async def generate(
        self,
        transcript: Sequence[ChatTurn],
        system_instruction: str,
    ) -> str:
        """Reply to the transcript via /api/chat."""
        payload = {
            "model": self.model,
            "messages": format_transcript(transcript, system_instruction),
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_tokens,
            },
        }

        async def _do_chat() -> str:
            start_time = time.time()
            result = await self._make_request("api/chat", payload)
            elapsed = time.time() - start_time

            message = result.get("message") or {}
            reply = message.get("content") or ""

            logger.info(
                "ollama_chat",
                model=self.model,
                turns=len(transcript),
                response_len=len(reply),
                elapsed_ms=int(elapsed * 1000),
            )
            return reply

        return await self._with_resilience(_do_chat)

    async def check_health(self) -> HealthStatus:
        """Check if Ollama is available."""
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=10) as client:
                response = await client.get(f"{self.host}/api/tags")

            if response.status_code != 200:
                status = HealthStatus(
                    available=False,
                    provider="ollama",
                    error=f"HTTP {response.status_code}",
                )
                self._update_health_cache(status)
                return status

            data = response.json()
            models = [m.get("name", "") for m in data.get("models", [])]

            if self.model not in models and not any(self.model in m for m in models):
                status = HealthStatus(
                    available=False,
                    provider="ollama",
                    model=self.model,
                    error=f"Model '{self.model}' not installed. Run: ollama pull {self.model}",
                )
                self._update_health_cache(status)
                return status

            status = HealthStatus(
                available=True,
                provider="ollama",
                model=self.model,
                response_time_ms=(time.time() - start_time) * 1000,
            )

        except httpx.ConnectError:
            status = HealthStatus(
                available=False,
                provider="ollama",
                error=f"Cannot connect to Ollama at {self.host}. Is 'ollama serve' running?",
            )

        except Exception as e:
            status = HealthStatus(available=False, provider="ollama", error=str(e))

        self._update_health_cache(status)
        return status


# Singleton
_ollama_provider: OllamaProvider | None = None


def get_ollama_provider() -> OllamaProvider:
    """Get or create the Ollama provider singleton."""
    global _ollama_provider
    if _ollama_provider is None:
        _ollama_provider = OllamaProvider()
    return _ollama_provider
