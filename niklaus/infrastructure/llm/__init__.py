"""Inference infrastructure implementations."""

from niklaus.core.interfaces.inference import IInferenceProvider
from niklaus.infrastructure.llm.base import (
    BaseInferenceProvider,
    CircuitBreakerState,
    format_transcript,
)
from niklaus.infrastructure.llm.factory import check_inference_health, get_inference_provider

__all__ = [
    # Interface
    "IInferenceProvider",
    # Base
    "BaseInferenceProvider",
    "CircuitBreakerState",
    "format_transcript",
    # Factory
    "get_inference_provider",
    "check_inference_health",
]
