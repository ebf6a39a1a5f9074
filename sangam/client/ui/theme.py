"""
Sangam palette - light and dark variants of the same semantic tokens.

Screens use the semantic names; ``palette_for`` picks the variant for the
effective theme and ``apply_theme`` pushes it onto the page.
"""

import flet as ft

# =============================================================================
# PRIMARY ACCENT COLORS
# =============================================================================
BLUE_PRIMARY = "#2563EB"       # Main accent, links, primary buttons
PURPLE_PRIMARY = "#9333EA"     # Translator, onboarding actions
GREEN_PRIMARY = "#22C55E"      # Extra mode, success
RED_PRIMARY = "#EF4444"        # Errors

# =============================================================================
# SEMANTIC TOKENS
# =============================================================================
LIGHT = {
    "background": "#F3F4F6",
    "surface": "#FFFFFF",
    "text": "#111827",
    "text_muted": "#6B7280",
    "header": BLUE_PRIMARY,
    "border": "#E5E7EB",
}

DARK = {
    "background": "#111827",
    "surface": "#1F2937",
    "text": "#F3F4F6",
    "text_muted": "#9CA3AF",
    "header": "#60A5FA",
    "border": "#374151",
}

NOTICE_COLORS = {
    "info": BLUE_PRIMARY,
    "pending": PURPLE_PRIMARY,
    "error": RED_PRIMARY,
}


def palette_for(theme: str) -> dict:
    return DARK if theme == "dark" else LIGHT


def apply_theme(page: ft.Page, theme: str) -> None:
    """Set theme mode and page colors for the effective theme."""
    palette = palette_for(theme)
    page.theme_mode = ft.ThemeMode.DARK if theme == "dark" else ft.ThemeMode.LIGHT
    page.theme = ft.Theme(color_scheme_seed=BLUE_PRIMARY, use_material3=True)
    page.dark_theme = ft.Theme(color_scheme_seed=BLUE_PRIMARY, use_material3=True)
    page.bgcolor = palette["background"]
