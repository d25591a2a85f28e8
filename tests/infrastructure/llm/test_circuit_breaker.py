"""
Tests for the inference circuit breaker and error mapping.
"""

import time

import pytest

from niklaus.core.exceptions import (
    CircuitBreakerOpenError,
    InferenceError,
    InferenceTimeoutError,
    InferenceUnavailableError,
)
from niklaus.core.interfaces import HealthStatus
from niklaus.infrastructure.llm.base import BaseInferenceProvider, CircuitBreakerState


class StubProvider(BaseInferenceProvider):
    """Provider whose operations are supplied by the test."""

    provider_name = "stub"

    async def generate(self, transcript, system_instruction):
        return "ok"

    async def check_health(self):
        return HealthStatus(available=True, provider=self.provider_name)


def _raising(error: BaseException):
    async def operation():
        raise error

    return operation


async def _ok():
    return "reply"


class TestCircuitBreakerState:
    """Tests for CircuitBreakerState."""

    def test_opens_at_threshold(self):
        breaker = CircuitBreakerState(failure_threshold=2, cooldown_seconds=30)

        breaker.record_failure()
        assert not breaker.is_open
        breaker.record_failure()
        assert breaker.is_open

        with pytest.raises(CircuitBreakerOpenError):
            breaker.check()

    def test_half_open_after_cooldown(self):
        breaker = CircuitBreakerState(failure_threshold=1, cooldown_seconds=30)
        breaker.record_failure()
        breaker.last_failure_time = time.time() - 31

        breaker.check()
        assert breaker.cooldown_remaining == 0

    def test_success_closes(self):
        breaker = CircuitBreakerState(failure_threshold=1)
        breaker.record_failure()

        breaker.record_success()

        assert not breaker.is_open
        assert breaker.failures == 0


class TestWithResilience:
    """Tests for BaseInferenceProvider._with_resilience."""

    @pytest.fixture
    def provider(self, monkeypatch) -> StubProvider:
        monkeypatch.setenv("INFERENCE_FAILURE_THRESHOLD", "2")
        return StubProvider()

    @pytest.mark.asyncio
    async def test_success(self, provider):
        assert await provider._with_resilience(_ok) == "reply"
        assert provider.circuit_breaker.failures == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error,expected",
        [
            (TimeoutError("slow"), InferenceTimeoutError),
            (ConnectionError("refused"), InferenceUnavailableError),
            (InferenceUnavailableError("stub", "HTTP 500"), InferenceUnavailableError),
        ],
    )
    async def test_transport_failures_count(self, provider, error, expected):
        with pytest.raises(expected):
            await provider._with_resilience(_raising(error))
        assert provider.circuit_breaker.failures == 1

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self, provider):
        with pytest.raises(InferenceError) as exc_info:
            await provider._with_resilience(_raising(KeyError("message")))

        assert exc_info.value.code == "INFERENCE_FAILED"
        assert provider.circuit_breaker.failures == 0

    @pytest.mark.asyncio
    async def test_no_retry(self, provider):
        calls = []

        async def operation():
            calls.append(1)
            raise ConnectionError("refused")

        with pytest.raises(InferenceUnavailableError):
            await provider._with_resilience(operation)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_open_circuit_fails_fast(self, provider):
        for _ in range(2):
            with pytest.raises(InferenceUnavailableError):
                await provider._with_resilience(_raising(ConnectionError("refused")))

        with pytest.raises(CircuitBreakerOpenError):
            await provider._with_resilience(_ok)
        assert not provider.is_available()
