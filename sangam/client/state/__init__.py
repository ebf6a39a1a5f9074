"""Application state for the Flet client.

- AppContext: process-wide handles (local store, remote backend, translator, bus)
- AppState: render-facing facade over the domain components
"""

from .app_state import AppState
from .context import AppContext

__all__ = ["AppContext", "AppState"]
