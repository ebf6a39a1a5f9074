"""Persistence Infrastructure - on-device key/value storage."""

from sangam.shared.infrastructure.persistence.local_store import (
    KEY_APP_OPENS,
    KEY_DISCLAIMER_ACCEPTED,
    KEY_TRANSLATION_HISTORY,
    KEY_USER_PREFERENCES,
    KEY_USER_PROFILE,
    LocalStore,
)

__all__ = [
    "LocalStore",
    "KEY_USER_PREFERENCES",
    "KEY_USER_PROFILE",
    "KEY_APP_OPENS",
    "KEY_DISCLAIMER_ACCEPTED",
    "KEY_TRANSLATION_HISTORY",
]
