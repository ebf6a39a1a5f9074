"""OS light/dark signal read from the Flet page."""

from __future__ import annotations

import logging
from typing import Callable

import flet as ft

from sangam.shared.core.channel import Channel, Unsubscribe
from sangam.shared.domain.models import Theme
from sangam.shared.domain.theme import OsThemeSource

logger = logging.getLogger(__name__)


class FletOsThemeSource(OsThemeSource):
    def __init__(self, page: ft.Page) -> None:
        self._page = page
        self._changes: Channel[Theme] = Channel("os.theme.flet")
        page.on_platform_brightness_change = self._on_brightness_change

    @property
    def current(self) -> Theme:
        return "dark" if self._page.platform_brightness == ft.Brightness.DARK else "light"

    def subscribe(self, listener: Callable[[Theme], None]) -> Unsubscribe:
        return self._changes.subscribe(listener)

    def _on_brightness_change(self, e) -> None:
        theme = self.current
        logger.debug(f"Platform brightness changed: {theme}")
        self._changes.emit(theme)
