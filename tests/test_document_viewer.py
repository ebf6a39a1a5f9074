"""Tests for the document viewer state."""

import asyncio

import pytest

from sangam.shared.domain.documents import DOCUMENT_NOT_FOUND, ZOOM_MAX, ZOOM_MIN, DocumentViewer
from sangam.shared.domain.navigation import PdfSelectPayload, PdfViewerPayload, Screen

PAYLOAD = PdfViewerPayload(id=2, type="digest")


@pytest.mark.asyncio
async def test_loading_indicator_clears_after_timeout():
    viewer = DocumentViewer(PAYLOAD, "https://cdn.test/2.pdf", load_timeout=0.02)
    changes = []
    viewer.changes.subscribe(lambda v: changes.append(v.is_loading))

    viewer.start()
    assert viewer.is_loading
    await asyncio.sleep(0.05)

    assert not viewer.is_loading
    assert viewer.timed_out
    assert changes == [False]


@pytest.mark.asyncio
async def test_load_event_cancels_fallback():
    viewer = DocumentViewer(PAYLOAD, "https://cdn.test/2.pdf", load_timeout=0.02)
    viewer.start()
    viewer.mark_loaded()
    await asyncio.sleep(0.05)

    assert not viewer.is_loading
    assert not viewer.timed_out


def test_unknown_document_shows_error():
    viewer = DocumentViewer(PAYLOAD, None)
    assert not viewer.is_loading
    assert viewer.error == DOCUMENT_NOT_FOUND


def test_zoom_is_clamped():
    viewer = DocumentViewer(PAYLOAD, "https://cdn.test/2.pdf")
    assert not viewer.can_zoom_out
    assert viewer.zoom_out() == ZOOM_MIN

    for _ in range(20):
        viewer.zoom_in()
    assert viewer.zoom == ZOOM_MAX
    assert not viewer.can_zoom_in

    assert viewer.zoom_out() == ZOOM_MAX - 25


def test_back_target_uses_document_type():
    viewer = DocumentViewer(PdfViewerPayload(id=9, type="note"), None)
    assert viewer.back_target() == (Screen.PDF_SELECT, PdfSelectPayload(type="note"))
