from __future__ import annotations

import logging

import flet as ft

from sangam.client.state import AppState
from sangam.client.ui.theme import NOTICE_COLORS, RED_PRIMARY, apply_theme, palette_for
from sangam.shared.core import events
from sangam.shared.core.event_bus import EventPayload
from sangam.shared.domain.navigation import BACK_TARGETS, Screen

logger = logging.getLogger(__name__)

SCREEN_TITLES = {
    "language_select": "Choose your language",
    "onboarding": "Welcome",
    "home": "Sangam",
    "extra_mode": "Extra Mode",
    "simple_mode": "Simple Mode",
    "ai_translator": "AI Translator",
    "notes_list": "Notes",
    "content_viewer": "Content",
    "pdf_select": "Documents",
    "pdf_viewer": "Document",
    "theme_settings": "Theme Settings",
}


def build_shell(page: ft.Page, state: AppState) -> ft.View:
    """Frame around the current screen: header, title and theme controls.

    Screen bodies are rendered elsewhere; the shell only tracks which one is
    live and keeps the page theme in step with the resolver.
    """
    title_text = ft.Text(size=20, weight=ft.FontWeight.W_700)
    subtitle_text = ft.Text(size=12)
    back_button = ft.IconButton(ft.Icons.ARROW_BACK, tooltip="Back")
    theme_button = ft.IconButton(ft.Icons.DARK_MODE, tooltip="Toggle theme")

    header = ft.Row([back_button, title_text, theme_button], alignment=ft.MainAxisAlignment.SPACE_BETWEEN)
    offline_banner = ft.Container(
        ft.Text("You are offline. Changes are saved on this device.", color=ft.Colors.WHITE, size=12),
        bgcolor=RED_PRIMARY,
        padding=8,
        visible=False,
    )
    dark_prompt_button = ft.TextButton("Try dark mode", icon=ft.Icons.DARK_MODE)
    body = ft.Column([subtitle_text, dark_prompt_button], expand=True)

    def _render() -> None:
        nav = state.nav
        palette = palette_for(state.effective_theme)
        header.visible = state.show_header
        back_button.visible = nav.screen in BACK_TARGETS
        title_text.value = SCREEN_TITLES.get(nav.screen.value, nav.screen.value)
        title_text.color = palette["header"]
        subtitle_text.value = f"Hello, {state.username}" if state.username else ""
        subtitle_text.color = palette["text_muted"]
        offline_banner.visible = not state.is_online.value
        dark_prompt_button.visible = state.show_dark_mode_prompt.value and nav.screen == Screen.HOME
        theme_button.icon = ft.Icons.LIGHT_MODE if state.effective_theme == "dark" else ft.Icons.DARK_MODE
        apply_theme(page, state.effective_theme)
        page.update()

    def on_back(e) -> None:
        state.back()

    def on_toggle_theme(e) -> None:
        state.toggle_theme()

    back_button.on_click = on_back
    theme_button.on_click = on_toggle_theme
    dark_prompt_button.on_click = on_toggle_theme

    async def _handle_refresh(payload: EventPayload) -> None:
        _render()

    async def _handle_notice(payload: EventPayload) -> None:
        kind = payload.get("kind", "info")
        page.show_dialog(
            ft.SnackBar(ft.Text(payload.get("message", "")), bgcolor=NOTICE_COLORS.get(kind))
        )

    for topic in (
        events.TOPIC_NAV_CHANGED,
        events.TOPIC_THEME_CHANGED,
        events.TOPIC_PROFILE_CHANGED,
        events.TOPIC_PREFERENCES_CHANGED,
        events.TOPIC_CONNECTIVITY_CHANGED,
    ):
        state.bus.subscribe(topic, _handle_refresh)
    state.bus.subscribe(events.TOPIC_NOTICE, _handle_notice)

    view = ft.View(route="/", controls=[offline_banner, header, body], padding=16)
    _render()
    return view
