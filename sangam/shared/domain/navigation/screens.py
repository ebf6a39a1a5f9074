"""Screens, their payload types and their explicit back targets."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Literal, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field


class Screen(str, Enum):
    LANGUAGE_SELECT = "language_select"
    ONBOARDING = "onboarding"
    HOME = "home"
    EXTRA_MODE = "extra_mode"
    SIMPLE_MODE = "simple_mode"
    AI_TRANSLATOR = "ai_translator"
    NOTES_LIST = "notes_list"
    CONTENT_VIEWER = "content_viewer"
    PDF_SELECT = "pdf_select"
    PDF_VIEWER = "pdf_viewer"
    THEME_SETTINGS = "theme_settings"


PdfType = Literal["digest", "note"]
ContentType = Literal["rasagran", "lesson_qna", "kavita"]


class ScreenPayload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class NotesListPayload(ScreenPayload):
    subject: str = Field(min_length=1)


class Content(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ContentType
    title: str
    text: str


class ContentViewerPayload(ScreenPayload):
    subject: str = Field(min_length=1)
    content: Content


class PdfSelectPayload(ScreenPayload):
    type: PdfType


class PdfViewerPayload(ScreenPayload):
    id: int
    type: PdfType


# Screens not listed take no payload
PAYLOAD_MODELS: Dict[Screen, Type[ScreenPayload]] = {
    Screen.NOTES_LIST: NotesListPayload,
    Screen.CONTENT_VIEWER: ContentViewerPayload,
    Screen.PDF_SELECT: PdfSelectPayload,
    Screen.PDF_VIEWER: PdfViewerPayload,
}


BackTarget = Tuple[Screen, Optional[ScreenPayload]]


def _to(screen: Screen) -> Callable[[Optional[ScreenPayload]], BackTarget]:
    return lambda payload: (screen, None)


def _content_viewer_back(payload: Optional[ScreenPayload]) -> BackTarget:
    assert isinstance(payload, ContentViewerPayload)
    return Screen.NOTES_LIST, NotesListPayload(subject=payload.subject)


def _pdf_viewer_back(payload: Optional[ScreenPayload]) -> BackTarget:
    assert isinstance(payload, PdfViewerPayload)
    return Screen.PDF_SELECT, PdfSelectPayload(type=payload.type)


# Back targets are rebuilt from the current payload, never from history.
# Language select, onboarding and home have no back action.
BACK_TARGETS: Dict[Screen, Callable[[Optional[ScreenPayload]], BackTarget]] = {
    Screen.EXTRA_MODE: _to(Screen.HOME),
    Screen.SIMPLE_MODE: _to(Screen.HOME),
    Screen.AI_TRANSLATOR: _to(Screen.HOME),
    Screen.THEME_SETTINGS: _to(Screen.HOME),
    Screen.NOTES_LIST: _to(Screen.EXTRA_MODE),
    Screen.CONTENT_VIEWER: _content_viewer_back,
    Screen.PDF_SELECT: _to(Screen.SIMPLE_MODE),
    Screen.PDF_VIEWER: _pdf_viewer_back,
}

# The header (and its menu) is hidden on these screens
HEADERLESS_SCREENS = frozenset({Screen.LANGUAGE_SELECT, Screen.ONBOARDING, Screen.PDF_VIEWER})
