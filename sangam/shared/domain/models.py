"""Domain models shared by the sync, theme, navigation and translation layers.

Wire formats use the camelCase keys already present in stored documents
(``useSystemTheme``); Python code uses snake_case field names.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Theme = Literal["light", "dark"]
THEMES: tuple[str, ...] = ("light", "dark")

USERNAME_PATTERN = re.compile(r"^[A-Za-z\s]+$")
USERNAME_MIN_LENGTH = 4


def opposite_theme(theme: Theme) -> Theme:
    return "dark" if theme == "light" else "light"


# =============================================================================
# Preferences
# =============================================================================

class UserPreferences(BaseModel):
    """Language and theme choice.

    ``theme`` is authoritative only while ``use_system_theme`` is False.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    language: str = Field(default="en", min_length=1)
    theme: Theme = "light"
    use_system_theme: bool = Field(default=True, alias="useSystemTheme")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


PREFERENCE_FIELDS = {
    "language": "language",
    "theme": "theme",
    "useSystemTheme": "use_system_theme",
    "use_system_theme": "use_system_theme",
}


def coerce_preference_fields(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only the well-formed preference fields of ``raw``.

    Accepts wire or Python keys and returns Python field names. Fields with
    invalid values are dropped individually so one bad field cannot discard the
    rest of a document.
    """
    fields: Dict[str, Any] = {}
    for key, value in raw.items():
        name = PREFERENCE_FIELDS.get(key)
        if name is None or value is None:
            continue
        if name == "language" and isinstance(value, str) and value.strip():
            fields[name] = value.strip()
        elif name == "theme" and value in THEMES:
            fields[name] = value
        elif name == "use_system_theme" and isinstance(value, bool):
            fields[name] = value
    return fields


# =============================================================================
# Profile
# =============================================================================

class Standard(str, Enum):
    """School grade offered at onboarding."""
    TENTH = "10th"


class UserProfile(BaseModel):
    """Onboarding profile, written once when onboarding completes."""
    model_config = ConfigDict(frozen=True)

    username: str
    school: str
    standard: Standard

    @field_validator("username")
    @classmethod
    def _check_username(cls, value: str) -> str:
        value = value.strip()
        if len(value) < USERNAME_MIN_LENGTH or not USERNAME_PATTERN.match(value):
            raise ValueError("Username must be at least 4 letters (A-Z, a-z, space only).")
        return value

    @field_validator("school")
    @classmethod
    def _check_school(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("School name cannot be empty.")
        return value

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


# =============================================================================
# Identity
# =============================================================================

DISCONNECTED_USER_ID = "offline_user"
FAILED_USER_ID = "auth_failed"


class IdentityKind(str, Enum):
    REMOTE = "remote"
    DISCONNECTED = "disconnected"
    FAILED = "failed"


class IdentityHandle(BaseModel):
    """The identity a session operates as."""
    model_config = ConfigDict(frozen=True)

    kind: IdentityKind
    user_id: str

    @classmethod
    def remote(cls, user_id: str) -> "IdentityHandle":
        return cls(kind=IdentityKind.REMOTE, user_id=user_id)

    @classmethod
    def disconnected(cls) -> "IdentityHandle":
        return cls(kind=IdentityKind.DISCONNECTED, user_id=DISCONNECTED_USER_ID)

    @classmethod
    def failed(cls) -> "IdentityHandle":
        return cls(kind=IdentityKind.FAILED, user_id=FAILED_USER_ID)

    @property
    def is_remote(self) -> bool:
        return self.kind == IdentityKind.REMOTE


def remote_user_id(identity: Optional[IdentityHandle]) -> Optional[str]:
    """User id usable for remote calls, or None for sentinels and pending identity."""
    if identity is None or not identity.is_remote:
        return None
    return identity.user_id


# =============================================================================
# Translation history
# =============================================================================

class TranslationHistoryItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    input: str
    output: str
    source_lang: str = Field(alias="source")
    target_lang: str = Field(alias="target")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
