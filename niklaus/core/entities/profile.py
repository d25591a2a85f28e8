"""
Identity and profile domain entities.

A profile is the application-level record derived from an authentication
event; it carries the role and the set of legal-entity accounts the user may
act as.
"""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Application role of a profile."""

    REPRESENTATIVE = "REPRESENTATIVE"
    ADMIN = "ADMIN"


DEFAULT_PROFILE_NAME = "Usuário"


class ProfileSeed(BaseModel):
    """Profile attributes collected at registration time."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: str | None = None


class AuthIdentity(BaseModel):
    """
    Raw identity reported by the auth provider.

    An auth event is either an AuthIdentity (signed in) or None (signed out).
    """

    model_config = ConfigDict(frozen=True)

    uid: str = Field(..., min_length=1)
    email: str | None = None
    display_name: str | None = None
    seed: ProfileSeed | None = None


class Profile(BaseModel):
    """Application profile of an authenticated user."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    email: str = ""
    name: str = DEFAULT_PROFILE_NAME
    role: UserRole = UserRole.REPRESENTATIVE
    category: str | None = None

    # Stored documents written by older clients use the "cnpjs" key
    entity_ids: frozenset[str] = Field(
        default_factory=frozenset,
        validation_alias=AliasChoices("entity_ids", "cnpjs"),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def default_for(cls, identity: AuthIdentity) -> "Profile":
        """Build the profile created on first sign-in."""
        seed = identity.seed
        name = (seed.name if seed else None) or identity.display_name or DEFAULT_PROFILE_NAME
        return cls(
            id=identity.uid,
            email=identity.email or "",
            name=name,
            role=UserRole.REPRESENTATIVE,
            category=seed.category if seed else None,
            entity_ids=frozenset(),
        )
