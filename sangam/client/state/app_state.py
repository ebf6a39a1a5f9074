"""Render-facing application state.

Builds the domain components from the ``AppContext``, derives the first frame
synchronously from the local snapshot, and forwards every domain change to the
EventBus so views only ever listen to bus topics.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from fletx.core import RxBool, RxInt, RxStr

from sangam.shared.core import events
from sangam.shared.core.channel import Unsubscribe
from sangam.shared.core.event_bus import EventBus, EventPayload
from sangam.shared.domain.documents import DocumentViewer
from sangam.shared.domain.feedback import FeedbackResult, FeedbackService
from sangam.shared.domain.identity import IdentityBootstrap
from sangam.shared.domain.models import IdentityHandle, UserPreferences, UserProfile
from sangam.shared.domain.navigation import (
    HEADERLESS_SCREENS,
    NavigationController,
    NavigationState,
    PdfViewerPayload,
    Screen,
    initial_screen_for,
)
from sangam.shared.domain.navigation.controller import PayloadInput
from sangam.shared.domain.sync import EntityChange, PreferenceSync, ProfileSync
from sangam.shared.domain.theme import OsThemeSource, StaticOsThemeSource, ThemeResolver, ThemeState
from sangam.shared.domain.translation import TranslationHistory, TranslatorSession
from sangam.shared.infrastructure.persistence import KEY_APP_OPENS, KEY_DISCLAIMER_ACCEPTED

from .context import AppContext

logger = logging.getLogger(__name__)

PROFILE_EDIT_NOTICE = "Profile editing is not available yet."

# Home suggests dark mode once the app has been opened more often than this
DARK_MODE_PROMPT_AFTER_OPENS = 2

# Localisation key of the overlay text shown while onboarding completes
LOADING_MESSAGE_KEY = "loading_msg"


def _as_count(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


class AppState:
    """Application shell state.

    Construction is synchronous and touches only the LocalStore, so the first
    screen and theme are known before anything is rendered. ``initialize``
    wires subscriptions and starts the background identity bootstrap.

    Render-facing flags are FletXr reactives; domain values (preferences,
    profile, navigation, theme) are read through the owning components.
    """

    def __init__(self, context: AppContext, os_theme: Optional[OsThemeSource] = None) -> None:
        self.context = context
        self.bus: EventBus = context.bus
        config = context.config

        self.preferences = PreferenceSync(
            context.local,
            context.remote_store,
            fallback_language=config.ui.fallback_language,
            tasks=context.tasks,
        )
        self.profile = ProfileSync(context.local, context.remote_store, tasks=context.tasks)
        self.identity = IdentityBootstrap(context.backend, config.remote.bootstrap_token, tasks=context.tasks)
        self.theme = ThemeResolver(
            self.preferences,
            os_theme or StaticOsThemeSource(),
            identity=lambda: self.identity.identity,
        )
        self.feedback = FeedbackService(context.remote_store, app_version=config.ui.app_version)
        self.translation_history = TranslationHistory(context.local, limit=config.translation.history_limit)

        self.preferences.load_initial()
        self.profile.load_initial()
        self.navigation = NavigationController(
            initial_screen_for(
                self.preferences.current,
                self.preferences.has_stored_language,
                self.profile.has_stored_profile,
            )
        )
        logger.info(f"Initial screen: {self.navigation.screen.value}")

        # Reactive UI State
        self.app_opens: RxInt = RxInt(0)
        self.disclaimer_accepted: RxBool = RxBool(False)
        self.disclaimer_open: RxBool = RxBool(False)
        self.is_loading: RxBool = RxBool(False)
        self.loading_message: RxStr = RxStr("")
        self.is_online: RxBool = RxBool(True)
        self.show_dark_mode_prompt: RxBool = RxBool(False)

        self._unsubscribers: List[Unsubscribe] = []
        self._started = False

    # ------------------------------------------------------------------ #
    # Derived views
    # ------------------------------------------------------------------ #

    @property
    def current_identity(self) -> Optional[IdentityHandle]:
        return self.identity.identity

    @property
    def language(self) -> str:
        return self.preferences.current.language

    @property
    def effective_theme(self) -> str:
        return self.theme.effective_theme

    @property
    def nav(self) -> NavigationState:
        return self.navigation.state

    @property
    def show_header(self) -> bool:
        return self.navigation.screen not in HEADERLESS_SCREENS

    @property
    def username(self) -> Optional[str]:
        return self.profile.username

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def initialize(self) -> None:
        """Bind subscriptions and start background work. Does not wait on the network."""
        if self._started:
            return
        self._started = True

        local = self.context.local
        self.app_opens.value = _as_count(local.read(KEY_APP_OPENS, 0)) + 1
        local.write(KEY_APP_OPENS, self.app_opens.value)
        self.disclaimer_accepted.value = local.read(KEY_DISCLAIMER_ACCEPTED, False) is True
        self._refresh_dark_mode_prompt()

        self._unsubscribers.extend([
            self.navigation.subscribe(self._on_navigation),
            self.preferences.subscribe(self._on_preferences),
            self.profile.subscribe(self._on_profile),
            self.theme.changes.subscribe(self._on_theme),
            self.identity.on_acquired(self._on_identity_acquired),
            self.identity.subscribe(self._on_identity),
        ])
        remote = self.context.remote_store
        if remote is not None:
            observer = remote.online.listen(self._on_connectivity)
            self._unsubscribers.append(observer.dispose)

        self.theme.start()
        self.identity.start()
        self.context.register_cleanup(self.close)
        logger.info(f"AppState initialized (app opens: {self.app_opens.value})")

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.theme.close()
        self.identity.close()

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #

    def goto(self, screen: Union[Screen, str], payload: PayloadInput = None) -> NavigationState:
        return self.navigation.goto(screen, payload)

    def back(self) -> Optional[NavigationState]:
        return self.navigation.back()

    def confirm_language(self, language: str) -> NavigationState:
        """First-run language choice; continues to onboarding or home."""
        self.preferences.save({"language": language}, self.current_identity)
        next_screen = Screen.HOME if self.profile.has_stored_profile else Screen.ONBOARDING
        return self.navigation.goto(next_screen)

    def change_language(self, language: str) -> UserPreferences:
        return self.preferences.save({"language": language}, self.current_identity)

    async def complete_onboarding(self, profile: UserProfile) -> UserProfile:
        """Store the profile and hold the confirmation overlay briefly.

        The remote write is not awaited; only the cosmetic delay is.
        """
        self.profile.save(profile, self.current_identity)
        self._set_loading(True, LOADING_MESSAGE_KEY)
        try:
            await asyncio.sleep(self.context.config.ui.onboarding_confirm_delay)
        finally:
            self._set_loading(False)
        return profile

    def toggle_theme(self) -> str:
        return self.theme.toggle_theme()

    def toggle_system_theme(self) -> ThemeState:
        return self.theme.toggle_system_theme()

    def open_simple_mode(self) -> bool:
        """Go to simple mode, or open the disclaimer on the first visit."""
        if self.disclaimer_accepted.value:
            self.navigation.goto(Screen.SIMPLE_MODE)
            return True
        self.disclaimer_open.value = True
        return False

    def accept_disclaimer(self) -> NavigationState:
        self.context.local.write(KEY_DISCLAIMER_ACCEPTED, True)
        self.disclaimer_accepted.value = True
        self.disclaimer_open.value = False
        return self.navigation.goto(Screen.SIMPLE_MODE)

    def dismiss_disclaimer(self) -> None:
        self.disclaimer_open.value = False

    def request_profile_edit(self) -> str:
        self._publish(events.TOPIC_NOTICE, events.create_notice_event(PROFILE_EDIT_NOTICE, "pending"))
        return PROFILE_EDIT_NOTICE

    async def submit_feedback(self, text: str) -> FeedbackResult:
        result = await self.feedback.submit(text, self.current_identity, self.profile.current)
        if result.accepted:
            await self.bus.publish(
                events.TOPIC_FEEDBACK_SUBMITTED,
                events.create_feedback_submitted_event(result.accepted, result.document_id),
            )
        return result

    def new_translator_session(self) -> TranslatorSession:
        self.translation_history.load()
        return TranslatorSession(self.context.translator, self.translation_history)

    def open_document(self, payload: Union[PdfViewerPayload, Dict[str, Any]], source_url: Optional[str]) -> DocumentViewer:
        """Navigate to the viewer and arm its load fallback. Needs a running event loop."""
        state = self.navigation.goto(Screen.PDF_VIEWER, payload)
        assert isinstance(state.payload, PdfViewerPayload)
        viewer = DocumentViewer(
            state.payload,
            source_url,
            load_timeout=self.context.config.ui.document_load_timeout,
        )
        viewer.start()
        return viewer

    # ------------------------------------------------------------------ #
    # Domain -> bus bridges
    # ------------------------------------------------------------------ #

    def _publish(self, topic: str, payload: EventPayload) -> None:
        self.context.tasks.spawn(self.bus.publish(topic, payload), label=f"publish:{topic}")

    def _set_loading(self, value: bool, message: Optional[str] = None) -> None:
        self.loading_message.value = message or ""
        self.is_loading.value = value
        self._publish(
            events.TOPIC_LOADING_CHANGED,
            events.create_loading_changed_event(value, self.loading_message.value or None),
        )

    def _refresh_dark_mode_prompt(self) -> None:
        self.show_dark_mode_prompt.value = (
            self.app_opens.value > DARK_MODE_PROMPT_AFTER_OPENS and self.effective_theme == "light"
        )

    def _on_connectivity(self) -> None:
        remote = self.context.remote_store
        assert remote is not None
        online = remote.online.value
        if online == self.is_online.value:
            return
        self.is_online.value = online
        self._publish(events.TOPIC_CONNECTIVITY_CHANGED, events.create_connectivity_changed_event(online))

    def _on_navigation(self, state: NavigationState) -> None:
        self._publish(
            events.TOPIC_NAV_CHANGED,
            events.create_nav_changed_event(state.screen.value, state.payload_dict()),
        )

    def _on_preferences(self, change: EntityChange[UserPreferences]) -> None:
        self._publish(
            events.TOPIC_PREFERENCES_CHANGED,
            events.create_preferences_changed_event(change.value.to_document(), change.source),
        )

    def _on_profile(self, change: EntityChange[Optional[UserProfile]]) -> None:
        document = change.value.to_document() if change.value else None
        self._publish(events.TOPIC_PROFILE_CHANGED, events.create_profile_changed_event(document, change.source))

    def _on_theme(self, state: ThemeState) -> None:
        self._refresh_dark_mode_prompt()
        self._publish(
            events.TOPIC_THEME_CHANGED,
            events.create_theme_changed_event(state.effective_theme, state.use_system_theme),
        )

    def _on_identity(self, handle: IdentityHandle) -> None:
        self._publish(
            events.TOPIC_IDENTITY_RESOLVED,
            events.create_identity_resolved_event(handle.kind.value, handle.user_id),
        )

    def _on_identity_acquired(self, handle: IdentityHandle) -> None:
        self.context.tasks.spawn(self._reconcile(handle), label="reconcile")

    async def _reconcile(self, handle: IdentityHandle) -> None:
        prefs_applied, profile_applied = await asyncio.gather(
            self.preferences.reconcile_remote(handle),
            self.profile.reconcile_remote(handle),
        )
        logger.info(
            f"Remote reconcile for {handle.user_id}: "
            f"preferences={'applied' if prefs_applied else 'kept local'}, "
            f"profile={'applied' if profile_applied else 'kept local'}"
        )
