"""Canonical event definitions for the Sangam client."""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from .event_bus import EventPayload

# Shell topics
TOPIC_NOTICE = "ui.notice"

# State topics
TOPIC_NAV_CHANGED = "nav.changed"
TOPIC_THEME_CHANGED = "theme.changed"
TOPIC_PREFERENCES_CHANGED = "preferences.changed"
TOPIC_PROFILE_CHANGED = "profile.changed"
TOPIC_IDENTITY_RESOLVED = "identity.resolved"
TOPIC_LOADING_CHANGED = "loading.changed"

# Remote activity
TOPIC_FEEDBACK_SUBMITTED = "feedback.submitted"
TOPIC_CONNECTIVITY_CHANGED = "connectivity.changed"


def create_notice_event(message: str, kind: Literal["info", "pending", "error"] = "info") -> EventPayload:
    """Create a transient notice shown by the shell (toast/snackbar)."""
    return {"message": message, "kind": kind}


def create_nav_changed_event(screen: str, payload: Optional[Dict[str, Any]]) -> EventPayload:
    """Screen and payload always travel together in one event."""
    return {"screen": screen, "payload": payload}


def create_theme_changed_event(effective_theme: str, use_system_theme: bool) -> EventPayload:
    return {"theme": effective_theme, "use_system_theme": use_system_theme}


def create_preferences_changed_event(preferences: Dict[str, Any], source: Literal["local", "remote"]) -> EventPayload:
    """Create a preferences event.

    Args:
        preferences: Wire-format preferences document
        source: ``local`` for user edits, ``remote`` for reconciliation
    """
    return {"preferences": preferences, "source": source}


def create_profile_changed_event(profile: Optional[Dict[str, Any]], source: Literal["local", "remote"]) -> EventPayload:
    return {"profile": profile, "source": source}


def create_identity_resolved_event(kind: str, user_id: str) -> EventPayload:
    return {"kind": kind, "user_id": user_id}


def create_loading_changed_event(is_loading: bool, message: str | None = None) -> EventPayload:
    return {"is_loading": is_loading, "message": message}


def create_feedback_submitted_event(accepted: bool, document_id: str | None = None) -> EventPayload:
    event: EventPayload = {"accepted": accepted}
    if document_id is not None:
        event["document_id"] = document_id
    return event


def create_connectivity_changed_event(online: bool) -> EventPayload:
    """Remote service reachability, as last observed by a remote call."""
    return {"online": online}
