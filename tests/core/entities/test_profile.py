"""Tests for profile and identity entities."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from niklaus.core.entities import (
    DEFAULT_PROFILE_NAME,
    AuthIdentity,
    Profile,
    ProfileSeed,
    UserRole,
)


class TestProfile:
    """Tests for Profile."""

    def test_defaults(self):
        profile = Profile(id="u1")
        assert profile.name == DEFAULT_PROFILE_NAME
        assert profile.role == UserRole.REPRESENTATIVE
        assert profile.entity_ids == frozenset()
        assert profile.email == ""
        assert not profile.is_admin

    def test_admin_flag(self):
        assert Profile(id="u1", role=UserRole.ADMIN).is_admin

    def test_legacy_cnpjs_key(self):
        """Stored documents using "cnpjs" populate entity_ids."""
        profile = Profile.model_validate({"id": "u1", "cnpjs": ["A", "B"]})
        assert profile.entity_ids == frozenset({"A", "B"})

    def test_role_from_string(self):
        profile = Profile.model_validate({"id": "u1", "role": "ADMIN"})
        assert profile.role == UserRole.ADMIN

    def test_unknown_role_rejected(self):
        with pytest.raises(PydanticValidationError):
            Profile.model_validate({"id": "u1", "role": "SUPERUSER"})

    def test_is_frozen(self):
        profile = Profile(id="u1")
        with pytest.raises(PydanticValidationError):
            profile.name = "Other"


class TestDefaultProfile:
    """Tests for the profile synthesized on first sign-in."""

    def test_uses_display_name(self):
        identity = AuthIdentity(uid="u1", email="a@b.com", display_name="Ana")
        profile = Profile.default_for(identity)
        assert profile.id == "u1"
        assert profile.email == "a@b.com"
        assert profile.name == "Ana"
        assert profile.role == UserRole.REPRESENTATIVE
        assert profile.entity_ids == frozenset()

    def test_falls_back_to_fixed_name(self):
        profile = Profile.default_for(AuthIdentity(uid="u1"))
        assert profile.name == "Usuário"
        assert profile.email == ""

    def test_seed_wins_over_display_name(self):
        identity = AuthIdentity(
            uid="u1",
            display_name="ana.silva",
            seed=ProfileSeed(name="Ana Silva", category="Distribuidor"),
        )
        profile = Profile.default_for(identity)
        assert profile.name == "Ana Silva"
        assert profile.category == "Distribuidor"

    def test_identity_requires_uid(self):
        with pytest.raises(PydanticValidationError):
            AuthIdentity(uid="")
