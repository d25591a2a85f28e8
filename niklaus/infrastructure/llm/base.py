"""
Base inference provider with a circuit breaker.

Requests are never retried automatically: a failed support message is
answered with the fixed apology and the user resubmits. Repeated transport
failures open the circuit so later messages fail fast.
"""

import time
from abc import ABC
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from niklaus.config import get_logger, get_settings
from niklaus.core.entities.chat import ChatTurn
from niklaus.core.exceptions import (
    CircuitBreakerOpenError,
    InferenceError,
    InferenceTimeoutError,
    InferenceUnavailableError,
)
from niklaus.core.interfaces import HealthStatus, IInferenceProvider

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class CircuitBreakerState:
    """State for circuit breaker pattern."""

    failures: int = 0
    last_failure_time: float = 0.0
    is_open: bool = False
    cooldown_seconds: int = 60
    failure_threshold: int = 3
    provider: str = "inference"

    def record_failure(self) -> None:
        """Record a failure and potentially open the circuit."""
        self.failures += 1
        self.last_failure_time = time.time()

        if self.failures >= self.failure_threshold:
            self.is_open = True
            logger.warning(
                "circuit_breaker_opened",
                provider=self.provider,
                failures=self.failures,
                cooldown=self.cooldown_seconds,
            )

    def record_success(self) -> None:
        """Record a success and reset the circuit."""
        if self.is_open:
            logger.info("circuit_breaker_closed", provider=self.provider)
        self.failures = 0
        self.is_open = False

    def check(self) -> None:
        """
        Check if circuit allows requests.

        Raises CircuitBreakerOpenError if circuit is open and cooldown not elapsed.
        """
        if not self.is_open:
            return

        elapsed = time.time() - self.last_failure_time
        remaining = int(self.cooldown_seconds - elapsed)

        if elapsed < self.cooldown_seconds:
            raise CircuitBreakerOpenError(self.provider, remaining)

        # Cooldown elapsed, allow one request (half-open state)
        logger.info("circuit_breaker_half_open", provider=self.provider)

    @property
    def cooldown_remaining(self) -> int:
        """Seconds remaining in cooldown."""
        if not self.is_open:
            return 0
        elapsed = time.time() - self.last_failure_time
        return max(0, int(self.cooldown_seconds - elapsed))


class BaseInferenceProvider(IInferenceProvider, ABC):
    """
    Base class for inference providers.

    Provides:
    - Circuit breaker for cascading failure prevention
    - Mapping of transport errors onto InferenceError subtypes
    - Health check caching
    """

    provider_name = "inference"

    def __init__(self) -> None:
        settings = get_settings()
        self.timeout = settings.inference.timeout
        self.circuit_breaker = CircuitBreakerState(
            failure_threshold=settings.inference.failure_threshold,
            cooldown_seconds=settings.inference.cooldown_seconds,
            provider=self.provider_name,
        )
        self._health_cache: HealthStatus | None = None
        self._health_cache_time: float = 0.0
        self._health_cache_ttl: float = 30.0  # Cache health for 30s

    async def _with_resilience(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Execute operation once behind the circuit breaker.

        Raises:
            CircuitBreakerOpenError: If circuit is open
            InferenceTimeoutError: If operation times out
            InferenceUnavailableError: If provider is unreachable
            InferenceError: Any other provider failure
        """
        self.circuit_breaker.check()

        try:
            result = await operation(*args, **kwargs)

        except TimeoutError:
            self.circuit_breaker.record_failure()
            raise InferenceTimeoutError(self.timeout)

        except (ConnectionError, OSError) as e:
            self.circuit_breaker.record_failure()
            raise InferenceUnavailableError(self.provider_name, str(e))

        except InferenceUnavailableError:
            self.circuit_breaker.record_failure()
            raise

        except InferenceError:
            raise

        except Exception as e:
            # Don't trip circuit for other errors (e.g., invalid response)
            logger.error("inference_error", provider=self.provider_name, error=str(e), error_type=type(e).__name__)
            raise InferenceError(str(e), code="INFERENCE_FAILED") from e

        self.circuit_breaker.record_success()
        return result

    def is_available(self) -> bool:
        """
        Synchronous availability check with caching.

        Uses cached health status to avoid blocking calls.
        """
        if self.circuit_breaker.is_open:
            return False

        now = time.time()
        if self._health_cache and (now - self._health_cache_time) < self._health_cache_ttl:
            return self._health_cache.available

        return True  # Optimistic - actual check happens async

    def _update_health_cache(self, status: HealthStatus) -> None:
        """Update the health cache."""
        self._health_cache = status
        self._health_cache_time = time.time()


def format_transcript(
    transcript: Sequence[ChatTurn],
    system_instruction: str | None = None,
) -> list[dict[str, str]]:
    """
    Flatten a transcript into role/content chat messages.

    Args:
        transcript: Ordered chat turns
        system_instruction: Optional leading system message

    Returns:
        List of {"role": "system"|"user"|"assistant", "content": "..."}
    """
    messages = []
    if system_instruction:
        messages.append({"role": "system", "content": system_instruction})
    for turn in transcript:
        messages.append({"role": turn.role.value, "content": turn.text})
    return messages
