"""
Abstract interface for the identity provider.

Credential verification happens behind this port; the session only consumes
sign-in/sign-out calls and the stream of identity changes.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from niklaus.core.entities.profile import AuthIdentity, ProfileSeed


class IAuthProvider(ABC):
    """
    Abstract interface for the auth collaborator.

    Implementations: InMemoryAuthProvider
    """

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthIdentity:
        """
        Authenticate with email and password.

        Raises:
            AuthError: Invalid credentials or provider failure
        """
        pass

    @abstractmethod
    async def register(self, email: str, password: str, seed: ProfileSeed) -> AuthIdentity:
        """
        Create credentials and sign in.

        The returned identity carries the seed so the first profile is built
        from it.

        Raises:
            AuthError: Email already registered or provider failure
        """
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """Drop the current identity."""
        pass

    @abstractmethod
    def identity_events(self) -> AsyncIterator[AuthIdentity | None]:
        """
        Stream of identity changes.

        Yields the current identity (or None) on subscription, then every
        change.
        """
        pass
