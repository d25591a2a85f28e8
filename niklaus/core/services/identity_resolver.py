"""
Identity resolution.

Turns auth events into application profiles, creating the profile on first
sign-in.
"""

from niklaus.config import get_logger
from niklaus.core.entities.profile import AuthIdentity, Profile
from niklaus.core.entities.records import decode_record
from niklaus.core.exceptions import DecodeError, ProfileStoreError
from niklaus.core.interfaces.storage import IProfileStore

logger = get_logger(__name__)


class IdentityResolver:
    """
    Resolve an auth event into a Profile.

    Store and decode failures are logged and resolve to None, which sends the
    user back to the login flow instead of into a half-loaded session.
    """

    def __init__(self, profile_store: IProfileStore):
        self._store = profile_store

    async def resolve(self, identity: AuthIdentity | None) -> Profile | None:
        """
        Resolve the profile for an identity.

        Args:
            identity: Current identity, or None when signed out

        Returns:
            Stored or newly created Profile, or None
        """
        if identity is None:
            return None

        try:
            document = await self._store.read_profile(identity.uid)
            if document is not None:
                profile = decode_record(Profile, identity.uid, document)
                logger.info("profile_loaded", profile_id=profile.id, role=profile.role.value)
                return profile

            profile = Profile.default_for(identity)
            await self._store.write_profile(profile)
            logger.info(
                "profile_created",
                profile_id=profile.id,
                seeded=identity.seed is not None,
            )
            return profile

        except ProfileStoreError as e:
            logger.error("profile_store_failed", profile_id=identity.uid, error=e.message)
            return None

        except DecodeError as e:
            logger.error("profile_decode_failed", profile_id=identity.uid, error=e.message)
            return None

        except Exception as e:
            # Adapters that leak raw transport errors
            logger.error(
                "profile_resolution_failed",
                profile_id=identity.uid,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
