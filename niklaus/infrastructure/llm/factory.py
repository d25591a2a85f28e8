"""
Inference provider factory.

Creates appropriate provider based on configuration.
"""

from typing import Any

from niklaus.config import get_logger, get_settings
from niklaus.core.interfaces import IInferenceProvider, InferenceProviderType

logger = get_logger(__name__)


def get_inference_provider(provider_type: str | None = None) -> IInferenceProvider:
    """
    Get an inference provider instance.

    Args:
        provider_type: "gemini" or "ollama" (default from settings)

    Returns:
        IInferenceProvider instance
    """
    settings = get_settings()
    provider_type = provider_type or settings.inference.provider

    if provider_type == InferenceProviderType.GEMINI.value:
        from niklaus.infrastructure.llm.gemini import get_gemini_provider

        return get_gemini_provider()

    elif provider_type == InferenceProviderType.OLLAMA.value:
        from niklaus.infrastructure.llm.ollama import get_ollama_provider

        return get_ollama_provider()

    else:
        raise ValueError(f"Unknown inference provider: {provider_type}")


async def check_inference_health() -> dict[str, Any]:
    """
    Check health of the configured inference provider.

    Returns:
        Dict with health status for the provider
    """
    settings = get_settings()

    try:
        provider = get_inference_provider()
        health = await provider.check_health()
        return health.__dict__
    except Exception as e:
        logger.warning("inference_health_failed", error=str(e))
        return {
            "available": False,
            "provider": settings.inference.provider,
            "error": str(e),
        }
