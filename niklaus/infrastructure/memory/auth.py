"""
In-memory identity provider.

Accounts live in a shared directory; each client gets its own provider that
tracks the currently signed-in identity and broadcasts changes.
"""

import asyncio
import hashlib
import hmac
import secrets
from collections.abc import AsyncIterator
from dataclasses import dataclass
from uuid import uuid4

from niklaus.config import get_logger
from niklaus.core.entities.profile import AuthIdentity, ProfileSeed
from niklaus.core.exceptions import AuthError
from niklaus.core.interfaces.auth import IAuthProvider

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6
_PBKDF2_ITERATIONS = 100_000


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)


@dataclass
class Account:
    """Stored credentials."""

    uid: str
    email: str
    salt: bytes
    password_hash: bytes
    display_name: str | None = None

    def check_password(self, password: str) -> bool:
        return hmac.compare_digest(self.password_hash, _hash_password(password, self.salt))


class AccountDirectory:
    """Shared credential directory."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    def create(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
        uid: str | None = None,
    ) -> Account:
        """
        Register new credentials.

        Raises:
            AuthError: Malformed email, weak password or email in use
        """
        key = self._key(email)
        if not key or "@" not in key:
            raise AuthError("Invalid email address", reason="invalid-email")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(
                f"Password must have at least {MIN_PASSWORD_LENGTH} characters",
                reason="weak-password",
            )
        if key in self._accounts:
            raise AuthError("Email already registered", reason="email-already-in-use")

        salt = secrets.token_bytes(16)
        account = Account(
            uid=uid or uuid4().hex,
            email=key,
            salt=salt,
            password_hash=_hash_password(password, salt),
            display_name=display_name,
        )
        self._accounts[key] = account
        return account

    def verify(self, email: str, password: str) -> Account:
        """
        Check credentials.

        Raises:
            AuthError: Unknown email or wrong password
        """
        account = self._accounts.get(self._key(email or ""))
        if account is None or not account.check_password(password or ""):
            raise AuthError("Invalid email or password", reason="invalid-credential")
        return account


class InMemoryAuthProvider(IAuthProvider):
    """Per-client auth state over a shared AccountDirectory."""

    def __init__(self, directory: AccountDirectory):
        self._directory = directory
        self._current: AuthIdentity | None = None
        self._queues: list[asyncio.Queue[AuthIdentity | None]] = []

    @property
    def current(self) -> AuthIdentity | None:
        return self._current

    def _publish(self, identity: AuthIdentity | None) -> None:
        self._current = identity
        for queue in list(self._queues):
            queue.put_nowait(identity)

    async def sign_in(self, email: str, password: str) -> AuthIdentity:
        account = self._directory.verify(email, password)
        identity = AuthIdentity(
            uid=account.uid,
            email=account.email,
            display_name=account.display_name,
        )
        logger.info("auth_signed_in", uid=account.uid)
        self._publish(identity)
        return identity

    async def register(self, email: str, password: str, seed: ProfileSeed) -> AuthIdentity:
        account = self._directory.create(email, password, display_name=seed.name)
        identity = AuthIdentity(
            uid=account.uid,
            email=account.email,
            display_name=account.display_name,
            seed=seed,
        )
        logger.info("auth_registered", uid=account.uid)
        self._publish(identity)
        return identity

    async def sign_out(self) -> None:
        if self._current is not None:
            logger.info("auth_signed_out", uid=self._current.uid)
        self._publish(None)

    async def identity_events(self) -> AsyncIterator[AuthIdentity | None]:
        queue: asyncio.Queue[AuthIdentity | None] = asyncio.Queue()
        queue.put_nowait(self._current)
        self._queues.append(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._queues.remove(queue)
