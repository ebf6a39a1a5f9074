"""Tests for the navigation state machine."""

import pytest

from sangam.shared.domain.models import UserPreferences
from sangam.shared.domain.navigation import (
    ContentViewerPayload,
    NavigationController,
    NavigationError,
    NotesListPayload,
    PdfSelectPayload,
    PdfViewerPayload,
    Screen,
    initial_screen,
    initial_screen_for,
)

CONTENT = {
    "subject": "Hindi",
    "content": {"type": "kavita", "title": "Poem", "text": "..."},
}


def test_initial_screen_precedence():
    assert initial_screen(None, False) == Screen.LANGUAGE_SELECT
    assert initial_screen(None, True) == Screen.LANGUAGE_SELECT
    assert initial_screen("hi", False) == Screen.ONBOARDING
    assert initial_screen("hi", True) == Screen.HOME


def test_initial_screen_ignores_fallback_language():
    # The fallback fills the model but is not a confirmed choice
    assert initial_screen_for(UserPreferences(language="en"), False, True) == Screen.LANGUAGE_SELECT


def test_goto_commits_screen_and_payload_together():
    nav = NavigationController(Screen.HOME)
    observed = []
    nav.subscribe(lambda state: observed.append((state.screen, state.payload, nav.state)))

    nav.goto(Screen.EXTRA_MODE)
    nav.goto(Screen.NOTES_LIST, {"subject": "Hindi"})
    nav.goto(Screen.CONTENT_VIEWER, CONTENT)

    screen, payload, live = observed[-1]
    assert screen == Screen.CONTENT_VIEWER
    assert isinstance(payload, ContentViewerPayload)
    assert payload.subject == "Hindi"
    assert live.payload is payload
    assert all(p is not None for s, p, _ in observed if s == Screen.CONTENT_VIEWER)


def test_goto_rejects_missing_payload_without_changing_state():
    nav = NavigationController(Screen.EXTRA_MODE)
    with pytest.raises(NavigationError):
        nav.goto(Screen.CONTENT_VIEWER)
    assert nav.screen == Screen.EXTRA_MODE


def test_goto_rejects_malformed_payload():
    nav = NavigationController(Screen.SIMPLE_MODE)
    with pytest.raises(NavigationError):
        nav.goto(Screen.PDF_SELECT, {"type": "novel"})
    with pytest.raises(NavigationError):
        nav.goto(Screen.PDF_SELECT, NotesListPayload(subject="Hindi"))


def test_goto_rejects_payload_for_plain_screen():
    nav = NavigationController(Screen.HOME)
    with pytest.raises(NavigationError):
        nav.goto(Screen.THEME_SETTINGS, {"subject": "x"})


def test_goto_accepts_screen_value_strings():
    nav = NavigationController(Screen.HOME)
    assert nav.goto("ai_translator").screen == Screen.AI_TRANSLATOR


def test_goto_rejects_unknown_screen_name():
    nav = NavigationController(Screen.HOME)
    seen = []
    nav.subscribe(seen.append)

    with pytest.raises(NavigationError):
        nav.goto("settings")

    assert nav.screen == Screen.HOME
    assert seen == []


def test_content_viewer_back_rebuilds_notes_list_payload():
    nav = NavigationController(Screen.HOME)
    nav.goto(Screen.CONTENT_VIEWER, CONTENT)

    state = nav.back()

    assert state.screen == Screen.NOTES_LIST
    assert state.payload == NotesListPayload(subject="Hindi")


def test_pdf_viewer_back_rebuilds_pdf_select_payload():
    nav = NavigationController(Screen.HOME)
    nav.goto(Screen.PDF_VIEWER, PdfViewerPayload(id=3, type="note"))

    state = nav.back()

    assert state.screen == Screen.PDF_SELECT
    assert state.payload == PdfSelectPayload(type="note")


@pytest.mark.parametrize(
    "start, payload, expected",
    [
        (Screen.EXTRA_MODE, None, Screen.HOME),
        (Screen.SIMPLE_MODE, None, Screen.HOME),
        (Screen.AI_TRANSLATOR, None, Screen.HOME),
        (Screen.THEME_SETTINGS, None, Screen.HOME),
        (Screen.NOTES_LIST, {"subject": "Marathi"}, Screen.EXTRA_MODE),
        (Screen.PDF_SELECT, {"type": "digest"}, Screen.SIMPLE_MODE),
    ],
)
def test_back_targets(start, payload, expected):
    nav = NavigationController(Screen.HOME)
    nav.goto(start, payload)
    assert nav.back().screen == expected
    assert nav.payload is None


def test_back_does_not_use_history():
    nav = NavigationController(Screen.HOME)
    nav.goto(Screen.SIMPLE_MODE)
    nav.goto(Screen.NOTES_LIST, {"subject": "Hindi"})
    # Notes list returns to extra mode even though simple mode came before it
    assert nav.back().screen == Screen.EXTRA_MODE


@pytest.mark.parametrize("screen", [Screen.HOME, Screen.LANGUAGE_SELECT, Screen.ONBOARDING])
def test_screens_without_back_target(screen):
    nav = NavigationController(screen)
    assert nav.back() is None
    assert nav.screen == screen


def test_payload_dict_is_plain_data():
    nav = NavigationController(Screen.HOME)
    state = nav.goto(Screen.PDF_VIEWER, {"id": 1, "type": "digest"})
    assert state.payload_dict() == {"id": 1, "type": "digest"}
