from .controller import (
    NavigationController,
    NavigationError,
    NavigationState,
    initial_screen,
    initial_screen_for,
    validate_payload,
)
from .screens import (
    BACK_TARGETS,
    HEADERLESS_SCREENS,
    PAYLOAD_MODELS,
    Content,
    ContentViewerPayload,
    NotesListPayload,
    PdfSelectPayload,
    PdfViewerPayload,
    Screen,
    ScreenPayload,
)

__all__ = [
    "NavigationController",
    "NavigationError",
    "NavigationState",
    "initial_screen",
    "initial_screen_for",
    "validate_payload",
    "BACK_TARGETS",
    "HEADERLESS_SCREENS",
    "PAYLOAD_MODELS",
    "Content",
    "ContentViewerPayload",
    "NotesListPayload",
    "PdfSelectPayload",
    "PdfViewerPayload",
    "Screen",
    "ScreenPayload",
]
