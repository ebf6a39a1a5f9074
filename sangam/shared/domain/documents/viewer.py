"""Document viewer state: load indicator with a fallback timeout, and zoom."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from sangam.shared.core.channel import Channel
from sangam.shared.domain.navigation.screens import PdfSelectPayload, PdfViewerPayload, Screen

logger = logging.getLogger(__name__)

ZOOM_MIN = 100
ZOOM_MAX = 300
ZOOM_STEP = 25
DEFAULT_LOAD_TIMEOUT = 3.0

DOCUMENT_NOT_FOUND = "Document not found"


class DocumentViewer:
    """State for one opened document.

    The embedded surface may never report that it finished loading, so the
    loading flag is cleared after ``load_timeout`` seconds regardless.
    """

    def __init__(
        self,
        payload: PdfViewerPayload,
        source_url: Optional[str],
        load_timeout: float = DEFAULT_LOAD_TIMEOUT,
    ) -> None:
        self.payload = payload
        self.source_url = source_url
        self.load_timeout = load_timeout
        self.zoom = ZOOM_MIN
        self.is_loading = source_url is not None
        self.error: Optional[str] = None if source_url else DOCUMENT_NOT_FOUND
        self.timed_out = False
        self._timer: Optional[asyncio.TimerHandle] = None
        self.changes: Channel["DocumentViewer"] = Channel("document.viewer")

    def start(self) -> None:
        """Arm the load fallback. Needs a running event loop."""
        if not self.is_loading or self._timer is not None:
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.load_timeout, self._on_timeout)

    def mark_loaded(self) -> None:
        self._cancel_timer()
        self._set_loading(False)

    def close(self) -> None:
        self._cancel_timer()
        self.changes.clear()

    @property
    def can_zoom_in(self) -> bool:
        return self.zoom < ZOOM_MAX

    @property
    def can_zoom_out(self) -> bool:
        return self.zoom > ZOOM_MIN

    def zoom_in(self) -> int:
        self.zoom = min(self.zoom + ZOOM_STEP, ZOOM_MAX)
        self.changes.emit(self)
        return self.zoom

    def zoom_out(self) -> int:
        self.zoom = max(self.zoom - ZOOM_STEP, ZOOM_MIN)
        self.changes.emit(self)
        return self.zoom

    def back_target(self) -> tuple[Screen, PdfSelectPayload]:
        return Screen.PDF_SELECT, PdfSelectPayload(type=self.payload.type)

    def _on_timeout(self) -> None:
        self._timer = None
        if self.is_loading:
            logger.warning(f"Document {self.payload.type}/{self.payload.id} load timed out; hiding indicator")
            self.timed_out = True
            self._set_loading(False)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _set_loading(self, value: bool) -> None:
        if self.is_loading != value:
            self.is_loading = value
            self.changes.emit(self)
