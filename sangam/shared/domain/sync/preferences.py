"""Preference sync: local-first writes, remote-wins reconciliation."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from sangam.shared.core.tasks import BackgroundTasks
from sangam.shared.domain.models import (
    PREFERENCE_FIELDS,
    IdentityHandle,
    UserPreferences,
    coerce_preference_fields,
)
from sangam.shared.domain.sync.base import EntityChange, SyncedEntity
from sangam.shared.infrastructure.persistence import KEY_USER_PREFERENCES, LocalStore
from sangam.shared.infrastructure.remote import RemoteStore

logger = logging.getLogger(__name__)


def to_wire_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename Python field names to their stored (camelCase) keys."""
    wire: Dict[str, Any] = {}
    for name, value in fields.items():
        alias = UserPreferences.model_fields[name].alias
        wire[alias or name] = value
    return wire


class PreferenceSync(SyncedEntity[UserPreferences]):
    """Owns the live ``UserPreferences`` value.

    Nothing outside this class replaces ``current``; every change goes through
    :meth:`save` (user edits) or :meth:`reconcile_remote` (identity acquired).
    """

    entity_name = "preferences"

    def __init__(
        self,
        local: LocalStore,
        remote: Optional[RemoteStore] = None,
        fallback_language: str = "en",
        tasks: Optional[BackgroundTasks] = None,
    ) -> None:
        super().__init__(local, remote, KEY_USER_PREFERENCES, tasks)
        self.fallback_language = fallback_language
        self._current = UserPreferences(language=fallback_language)
        self._has_stored_language = False

    @property
    def current(self) -> UserPreferences:
        return self._current

    @property
    def has_stored_language(self) -> bool:
        """True once a language has been confirmed on this device or reconciled."""
        return self._has_stored_language

    def load_initial(self) -> UserPreferences:
        """Read the stored preferences synchronously, filling in defaults."""
        raw = self.local.read(self.local_key)
        if raw is not None and not isinstance(raw, dict):
            logger.warning(f"Ignoring stored preferences of type {type(raw).__name__}")
            raw = None

        fields = coerce_preference_fields(raw or {})
        self._has_stored_language = "language" in fields
        self._current = UserPreferences(**{"language": self.fallback_language, **fields})
        logger.debug(f"Initial preferences: {self._current.to_document()}")
        return self._current

    async def reconcile_remote(self, identity: Optional[IdentityHandle]) -> bool:
        """Overwrite local fields with the ones the remote document defines.

        Returns True when remote values were applied. A missing document or a
        failed fetch keeps the local values.
        """
        user_id = self._remote_target(identity)
        if user_id is None:
            return False

        document = await self._fetch_remote(self.remote.fetch_preferences, user_id)
        if not document:
            return False

        fields = coerce_preference_fields(document)
        if not fields:
            logger.warning(f"Remote preferences for {user_id} had no usable fields")
            return False

        self._apply(fields, "remote")
        logger.info(f"Reconciled preferences from remote: {sorted(fields)}")
        return True

    def save(self, changes: Mapping[str, Any], identity: Optional[IdentityHandle]) -> UserPreferences:
        """Apply ``changes`` locally now and merge them into the remote document later."""
        fields = coerce_preference_fields(changes)
        dropped = [key for key in changes if PREFERENCE_FIELDS.get(key) not in fields]
        if dropped:
            logger.warning(f"Ignoring invalid preference changes: {dropped}")
        if not fields:
            return self._current

        updated = self._apply(fields, "local")

        user_id = self._remote_target(identity)
        if user_id is not None:
            wire = to_wire_fields(fields)
            self._push_remote(lambda: self.remote.merge_preferences(user_id, wire), user_id)
        return updated

    def _apply(self, fields: Dict[str, Any], source: str) -> UserPreferences:
        self._current = self._current.model_copy(update=fields)
        if "language" in fields:
            self._has_stored_language = True
        self._persist_local(self._current.to_document())
        self.changes.emit(EntityChange(self._current, source))
        return self._current
