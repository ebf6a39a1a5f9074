"""Single-slot navigation state machine."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from sangam.shared.core.channel import Channel, Unsubscribe
from sangam.shared.domain.models import UserPreferences
from sangam.shared.domain.navigation.screens import BACK_TARGETS, PAYLOAD_MODELS, Screen, ScreenPayload

logger = logging.getLogger(__name__)

PayloadInput = Union[ScreenPayload, Mapping[str, Any], None]


class NavigationError(ValueError):
    """A transition was requested with a payload the target screen cannot render."""


class NavigationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    screen: Screen
    payload: Optional[ScreenPayload] = None

    def payload_dict(self) -> Optional[dict]:
        return self.payload.model_dump() if self.payload is not None else None


def initial_screen(preferences_language: Optional[str], has_profile: bool) -> Screen:
    """Startup screen from the locally stored snapshot."""
    if not preferences_language:
        return Screen.LANGUAGE_SELECT
    if not has_profile:
        return Screen.ONBOARDING
    return Screen.HOME


def initial_screen_for(
    preferences: UserPreferences,
    has_stored_language: bool,
    has_profile: bool,
) -> Screen:
    return initial_screen(preferences.language if has_stored_language else None, has_profile)


def validate_payload(screen: Screen, payload: PayloadInput) -> Optional[ScreenPayload]:
    model = PAYLOAD_MODELS.get(screen)
    if model is None:
        if payload is not None:
            raise NavigationError(f"Screen '{screen.value}' takes no payload")
        return None

    if payload is None:
        raise NavigationError(f"Screen '{screen.value}' requires a {model.__name__}")
    if isinstance(payload, model):
        return payload
    if isinstance(payload, ScreenPayload):
        raise NavigationError(f"Screen '{screen.value}' expects {model.__name__}, got {type(payload).__name__}")
    try:
        return model.model_validate(dict(payload))
    except (ValidationError, TypeError, ValueError) as e:
        raise NavigationError(f"Invalid payload for '{screen.value}': {e}") from e


class NavigationController:
    """Holds the one live ``(screen, payload)`` pair.

    Every transition replaces the state with a single immutable value, so an
    observer can never see the new screen paired with the old payload.
    """

    def __init__(self, initial: Screen) -> None:
        self._state = NavigationState(screen=initial)
        self.changes: Channel[NavigationState] = Channel("navigation.changes")

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def screen(self) -> Screen:
        return self._state.screen

    @property
    def payload(self) -> Optional[ScreenPayload]:
        return self._state.payload

    def subscribe(self, listener: Callable[[NavigationState], None]) -> Unsubscribe:
        return self.changes.subscribe(listener)

    def goto(self, screen: Union[Screen, str], payload: PayloadInput = None) -> NavigationState:
        """Move to ``screen``.

        Raises:
            NavigationError: If the screen is unknown or the payload is missing,
                unexpected or malformed
        """
        try:
            target = Screen(screen)
        except ValueError:
            raise NavigationError(f"Unknown screen: {screen!r}") from None
        validated = validate_payload(target, payload)
        self._state = NavigationState(screen=target, payload=validated)
        logger.debug(f"Navigated to {target.value}")
        self.changes.emit(self._state)
        return self._state

    def back(self) -> Optional[NavigationState]:
        """Follow the current screen's back target. Returns None where there is none."""
        target = BACK_TARGETS.get(self._state.screen)
        if target is None:
            logger.debug(f"No back target from {self._state.screen.value}")
            return None
        screen, payload = target(self._state.payload)
        return self.goto(screen, payload)
