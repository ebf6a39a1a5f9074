from .viewer import (
    DEFAULT_LOAD_TIMEOUT,
    DOCUMENT_NOT_FOUND,
    ZOOM_MAX,
    ZOOM_MIN,
    ZOOM_STEP,
    DocumentViewer,
)

__all__ = [
    "DEFAULT_LOAD_TIMEOUT",
    "DOCUMENT_NOT_FOUND",
    "DocumentViewer",
    "ZOOM_MAX",
    "ZOOM_MIN",
    "ZOOM_STEP",
]
