"""Pytest fixtures for API tests."""

import time
from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from niklaus.api.main import create_app
from niklaus.application.services import Backend, get_backend
from niklaus.infrastructure.memory import seed_backend

PASSWORD = "segredo1"

SEED = {
    "accounts": [
        {
            "email": "rep@niklaus.com.br",
            "password": PASSWORD,
            "uid": "u-rep",
            "profile": {"name": "Rep", "role": "REPRESENTATIVE", "cnpjs": ["A"]},
        },
        {
            "email": "admin@niklaus.com.br",
            "password": PASSWORD,
            "uid": "u-admin",
            "profile": {"name": "Admin", "role": "ADMIN"},
        },
    ],
    "entities": {
        "A": {"name": "Alfa Comércio Ltda", "cnpj": "11.111.111/0001-11"},
        "B": {"name": "Beta Distribuidora", "cnpj": "22.222.222/0001-22"},
    },
    "products": {
        "X": {"name": "Caixa Organizadora", "price": 10.0, "unit": "un"},
        "Y": {"name": "Fita Adesiva", "price": 2.5, "unit": "rolo"},
    },
}


@pytest.fixture
def backend(inference) -> Backend:
    """Shared backend seeded before the app starts."""
    backend = get_backend(inference=inference)
    seed_backend(SEED, backend.accounts, backend.profiles, backend.live_store)
    return backend


@pytest.fixture
def client(backend) -> Generator[TestClient, None, None]:
    """Create sync test client."""
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def session_client(client: TestClient) -> TestClient:
    """Client with a fresh X-Session-ID header."""
    response = client.post("/api/session")
    assert response.status_code == 201
    client.headers["X-Session-ID"] = response.json()["session_id"]
    return client


@pytest.fixture
def sign_in(session_client: TestClient, poll) -> Callable:
    """Sign in and wait until the live entities have arrived."""

    def _sign_in(email: str = "rep@niklaus.com.br") -> dict:
        response = session_client.post(
            "/api/auth/sign-in",
            json={"email": email, "password": PASSWORD},
        )
        assert response.status_code == 200
        poll(lambda: session_client.get("/api/entities").json())
        return response.json()

    return _sign_in


@pytest.fixture
def poll() -> Callable:
    """Retry until the callable returns something truthy."""

    def _poll(fetch: Callable, timeout: float = 2.0):
        deadline = time.monotonic() + timeout
        while True:
            result = fetch()
            if result:
                return result
            if time.monotonic() > deadline:
                raise AssertionError("condition not met before timeout")
            time.sleep(0.01)

    return _poll
