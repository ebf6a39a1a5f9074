"""Profile sync. Same discipline as preferences, but remote writes replace the document."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from sangam.shared.core.tasks import BackgroundTasks
from sangam.shared.domain.models import IdentityHandle, UserProfile
from sangam.shared.domain.sync.base import EntityChange, SyncedEntity
from sangam.shared.infrastructure.persistence import KEY_USER_PROFILE, LocalStore
from sangam.shared.infrastructure.remote import RemoteStore

logger = logging.getLogger(__name__)


def parse_profile(raw: Any) -> Optional[UserProfile]:
    """Validate a stored profile; anything unusable reads as absent."""
    if raw is None:
        return None
    if not isinstance(raw, dict):
        logger.warning(f"Ignoring stored profile of type {type(raw).__name__}")
        return None
    try:
        return UserProfile.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid stored profile: {e.error_count()} error(s)")
        return None


def stored_username(raw: Any) -> Optional[str]:
    """Username of a stored profile, even one that otherwise fails validation."""
    if not isinstance(raw, dict):
        return None
    username = raw.get("username")
    if isinstance(username, str) and username.strip():
        return username.strip()
    return None


class ProfileSync(SyncedEntity[Optional[UserProfile]]):
    entity_name = "profile"

    def __init__(
        self,
        local: LocalStore,
        remote: Optional[RemoteStore] = None,
        tasks: Optional[BackgroundTasks] = None,
    ) -> None:
        super().__init__(local, remote, KEY_USER_PROFILE, tasks)
        self._current: Optional[UserProfile] = None
        self._stored_username: Optional[str] = None

    @property
    def current(self) -> Optional[UserProfile]:
        return self._current

    @property
    def username(self) -> Optional[str]:
        if self._current is not None:
            return self._current.username
        return self._stored_username

    @property
    def has_stored_profile(self) -> bool:
        """True when a profile with a username is stored, valid or not.

        Routing only needs the username; a profile whose other fields no
        longer validate still counts as onboarded.
        """
        return self.username is not None

    def load_initial(self) -> Optional[UserProfile]:
        raw = self.local.read(self.local_key)
        self._current = parse_profile(raw)
        self._stored_username = stored_username(raw)
        return self._current

    async def reconcile_remote(self, identity: Optional[IdentityHandle]) -> bool:
        user_id = self._remote_target(identity)
        if user_id is None:
            return False

        document = await self._fetch_remote(self.remote.fetch_profile, user_id)
        profile = parse_profile(document) if document else None
        if profile is None:
            return False

        self._apply(profile, "remote")
        logger.info(f"Reconciled profile from remote for {user_id}")
        return True

    def save(self, profile: UserProfile, identity: Optional[IdentityHandle]) -> UserProfile:
        """Store the whole profile locally, then replace the remote document."""
        self._apply(profile, "local")

        user_id = self._remote_target(identity)
        if user_id is not None:
            document = profile.to_document()
            self._push_remote(lambda: self.remote.replace_profile(user_id, document), user_id)
        return profile

    def _apply(self, profile: UserProfile, source: str) -> None:
        self._current = profile
        self._persist_local(profile.to_document())
        self.changes.emit(EntityChange(profile, source))
