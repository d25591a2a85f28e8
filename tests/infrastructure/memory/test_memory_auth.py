"""Tests for the in-memory account directory and auth provider."""

import asyncio

import pytest

from niklaus.core.entities import ProfileSeed
from niklaus.core.exceptions import AuthError
from niklaus.infrastructure.memory import AccountDirectory, InMemoryAuthProvider


@pytest.fixture
def directory() -> AccountDirectory:
    directory = AccountDirectory()
    directory.create("rep@niklaus.com.br", "segredo1", display_name="Rep", uid="u-rep")
    return directory


class TestAccountDirectory:
    """Tests for AccountDirectory."""

    def test_verify(self, directory):
        account = directory.verify("REP@niklaus.com.br ", "segredo1")
        assert account.uid == "u-rep"

    def test_password_not_stored_in_clear(self, directory):
        account = directory.verify("rep@niklaus.com.br", "segredo1")
        assert b"segredo1" not in account.password_hash

    @pytest.mark.parametrize(
        "email,password,reason",
        [
            ("sem-arroba", "segredo1", "invalid-email"),
            ("nova@niklaus.com.br", "123", "weak-password"),
            ("rep@niklaus.com.br", "segredo1", "email-already-in-use"),
        ],
    )
    def test_create_rejections(self, directory, email, password, reason):
        with pytest.raises(AuthError) as exc_info:
            directory.create(email, password)
        assert exc_info.value.details["reason"] == reason

    @pytest.mark.parametrize(
        "email,password",
        [("rep@niklaus.com.br", "errada"), ("ninguem@niklaus.com.br", "segredo1")],
    )
    def test_invalid_credentials(self, directory, email, password):
        with pytest.raises(AuthError) as exc_info:
            directory.verify(email, password)
        assert exc_info.value.details["reason"] == "invalid-credential"


class TestInMemoryAuthProvider:
    """Tests for InMemoryAuthProvider."""

    @pytest.mark.asyncio
    async def test_sign_in_sets_current(self, directory):
        auth = InMemoryAuthProvider(directory)

        identity = await auth.sign_in("rep@niklaus.com.br", "segredo1")

        assert identity.uid == "u-rep"
        assert identity.display_name == "Rep"
        assert auth.current == identity

    @pytest.mark.asyncio
    async def test_register_carries_seed(self, directory):
        auth = InMemoryAuthProvider(directory)
        seed = ProfileSeed(name="Nova", category="Varejo")

        identity = await auth.register("nova@niklaus.com.br", "segredo1", seed)

        assert identity.seed == seed
        assert directory.verify("nova@niklaus.com.br", "segredo1").uid == identity.uid

    @pytest.mark.asyncio
    async def test_failed_sign_in_keeps_identity(self, directory):
        auth = InMemoryAuthProvider(directory)
        await auth.sign_in("rep@niklaus.com.br", "segredo1")

        with pytest.raises(AuthError):
            await auth.sign_in("rep@niklaus.com.br", "errada")

        assert auth.current.uid == "u-rep"

    @pytest.mark.asyncio
    async def test_identity_events(self, directory):
        """Should yield the current identity first, then every change."""
        auth = InMemoryAuthProvider(directory)
        events = auth.identity_events()

        assert await anext(events) is None

        await auth.sign_in("rep@niklaus.com.br", "segredo1")
        assert (await asyncio.wait_for(anext(events), 1)).uid == "u-rep"

        await auth.sign_out()
        assert await asyncio.wait_for(anext(events), 1) is None

        await events.aclose()

    @pytest.mark.asyncio
    async def test_providers_are_independent(self, directory):
        first = InMemoryAuthProvider(directory)
        second = InMemoryAuthProvider(directory)

        await first.sign_in("rep@niklaus.com.br", "segredo1")

        assert second.current is None
