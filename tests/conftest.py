"""Pytest configuration and fixtures."""

import asyncio
from collections.abc import Callable, Sequence

import pytest

from niklaus.application.services import reset_services
from niklaus.config import reset_settings
from niklaus.core.entities import ChatTurn, Entity, Product, Profile, UserRole
from niklaus.core.exceptions import InferenceError
from niklaus.core.interfaces import HealthStatus, IInferenceProvider


class ScriptedInference(IInferenceProvider):
    """Inference provider returning queued replies (or raising queued errors)."""

    def __init__(self, *replies: str | Exception):
        self.replies = list(replies)
        self.calls: list[tuple[list[ChatTurn], str]] = []
        self.gate: asyncio.Event | None = None

    async def generate(self, transcript: Sequence[ChatTurn], system_instruction: str) -> str:
        self.calls.append((list(transcript), system_instruction))
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def check_health(self) -> HealthStatus:
        return HealthStatus(available=True, provider="scripted", model="test")


async def wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    """Poll until the predicate holds; fails the test on timeout."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(0.005)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Fresh settings and service singletons for each test."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def entity_a() -> Entity:
    return Entity(id="A", name="Alfa Comércio Ltda", cnpj="11.111.111/0001-11", city="São Paulo")


@pytest.fixture
def entity_b() -> Entity:
    return Entity(id="B", name="Beta Distribuidora", cnpj="22.222.222/0001-22")


@pytest.fixture
def product_x() -> Product:
    return Product(id="X", name="Caixa Organizadora", price=10.0, unit="un")


@pytest.fixture
def product_y() -> Product:
    return Product(id="Y", name="Fita Adesiva", price=2.5, unit="rolo")


@pytest.fixture
def rep_profile() -> Profile:
    return Profile(id="u-rep", email="rep@niklaus.com.br", name="Rep", entity_ids=frozenset({"A"}))


@pytest.fixture
def admin_profile() -> Profile:
    return Profile(id="u-admin", email="admin@niklaus.com.br", name="Admin", role=UserRole.ADMIN)


@pytest.fixture
def inference() -> ScriptedInference:
    return ScriptedInference()


@pytest.fixture
def scripted_inference() -> type[ScriptedInference]:
    """The ScriptedInference class, for tests that queue replies."""
    return ScriptedInference


@pytest.fixture(name="wait_until")
def wait_until_fixture() -> Callable:
    return wait_until
