from .base import EntityChange, SyncedEntity
from .preferences import PreferenceSync, to_wire_fields
from .profile import ProfileSync, parse_profile, stored_username

__all__ = [
    "EntityChange",
    "SyncedEntity",
    "PreferenceSync",
    "ProfileSync",
    "parse_profile",
    "stored_username",
    "to_wire_fields",
]
