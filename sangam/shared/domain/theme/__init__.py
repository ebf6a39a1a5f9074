from .resolver import (
    OsThemeSource,
    StaticOsThemeSource,
    ThemeResolver,
    ThemeState,
    resolve_effective_theme,
)

__all__ = [
    "OsThemeSource",
    "StaticOsThemeSource",
    "ThemeResolver",
    "ThemeState",
    "resolve_effective_theme",
]
