"""Effective theme derivation and the OS theme subscription."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from sangam.shared.core.channel import Channel, Unsubscribe
from sangam.shared.domain.models import IdentityHandle, Theme, UserPreferences, opposite_theme
from sangam.shared.domain.sync import EntityChange, PreferenceSync

logger = logging.getLogger(__name__)


def resolve_effective_theme(explicit_theme: Theme, use_system_theme: bool, os_theme: Theme) -> Theme:
    return os_theme if use_system_theme else explicit_theme


class ThemeState(BaseModel):
    model_config = ConfigDict(frozen=True)

    effective_theme: Theme
    use_system_theme: bool


class OsThemeSource(ABC):
    """Live light/dark signal reported by the operating system."""

    @property
    @abstractmethod
    def current(self) -> Theme:
        """The theme the OS reports right now."""

    @abstractmethod
    def subscribe(self, listener: Callable[[Theme], None]) -> Unsubscribe:
        """Register for OS theme changes."""


class StaticOsThemeSource(OsThemeSource):
    """OS signal driven by hand; used where no platform signal exists."""

    def __init__(self, theme: Theme = "light") -> None:
        self._theme: Theme = theme
        self._changes: Channel[Theme] = Channel("os.theme")

    @property
    def current(self) -> Theme:
        return self._theme

    @property
    def listener_count(self) -> int:
        return len(self._changes)

    def subscribe(self, listener: Callable[[Theme], None]) -> Unsubscribe:
        return self._changes.subscribe(listener)

    def set_theme(self, theme: Theme) -> None:
        if theme == self._theme:
            return
        self._theme = theme
        self._changes.emit(theme)


class ThemeResolver:
    """Derives the rendered theme and holds the OS subscription while following the system.

    Preference writes go through ``PreferenceSync``; the resolver reacts to its
    change notifications, so remote reconciliation and local toggles take the
    same path.
    """

    def __init__(
        self,
        preferences: PreferenceSync,
        os_source: OsThemeSource,
        identity: Callable[[], Optional[IdentityHandle]] = lambda: None,
    ) -> None:
        self._preferences = preferences
        self._os_source = os_source
        self._identity = identity
        self._os_unsubscribe: Optional[Unsubscribe] = None
        self._prefs_unsubscribe: Optional[Unsubscribe] = None
        self._last_state: Optional[ThemeState] = None
        self.changes: Channel[ThemeState] = Channel("theme.changes")

    # ------------------------------------------------------------------ #
    # Derived state
    # ------------------------------------------------------------------ #

    @property
    def use_system_theme(self) -> bool:
        return self._preferences.current.use_system_theme

    @property
    def effective_theme(self) -> Theme:
        prefs = self._preferences.current
        return resolve_effective_theme(prefs.theme, prefs.use_system_theme, self._os_source.current)

    @property
    def state(self) -> ThemeState:
        return ThemeState(effective_theme=self.effective_theme, use_system_theme=self.use_system_theme)

    @property
    def following_os(self) -> bool:
        """True while the OS subscription is held."""
        return self._os_unsubscribe is not None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def start(self) -> ThemeState:
        if self._prefs_unsubscribe is None:
            self._prefs_unsubscribe = self._preferences.subscribe(self._on_preferences_changed)
        self._sync_os_subscription()
        self._last_state = self.state
        return self._last_state

    def close(self) -> None:
        if self._prefs_unsubscribe is not None:
            self._prefs_unsubscribe()
            self._prefs_unsubscribe = None
        self._release_os()

    # ------------------------------------------------------------------ #
    # User actions
    # ------------------------------------------------------------------ #

    def toggle_theme(self) -> Theme:
        """Flip the rendered theme and stop following the OS."""
        new_theme = opposite_theme(self.effective_theme)
        self._preferences.save({"theme": new_theme, "use_system_theme": False}, self._identity())
        return new_theme

    def set_use_system_theme(self, enabled: bool) -> ThemeState:
        if enabled:
            self._preferences.save({"use_system_theme": True}, self._identity())
        else:
            # Keep what is on screen as the explicit choice
            self._preferences.save(
                {"use_system_theme": False, "theme": self.effective_theme},
                self._identity(),
            )
        return self.state

    def toggle_system_theme(self) -> ThemeState:
        return self.set_use_system_theme(not self.use_system_theme)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _on_preferences_changed(self, change: EntityChange[UserPreferences]) -> None:
        self._sync_os_subscription()
        self._publish_if_changed()

    def _on_os_theme(self, theme: Theme) -> None:
        logger.debug(f"OS theme changed to {theme}")
        self._publish_if_changed()

    def _sync_os_subscription(self) -> None:
        if self.use_system_theme and self._os_unsubscribe is None:
            self._os_unsubscribe = self._os_source.subscribe(self._on_os_theme)
            logger.debug("Following OS theme")
        elif not self.use_system_theme:
            self._release_os()

    def _release_os(self) -> None:
        if self._os_unsubscribe is not None:
            self._os_unsubscribe()
            self._os_unsubscribe = None
            logger.debug("Stopped following OS theme")

    def _publish_if_changed(self) -> None:
        state = self.state
        if state != self._last_state:
            self._last_state = state
            self.changes.emit(state)
