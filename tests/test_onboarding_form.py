"""Tests for the two-step onboarding form."""

from sangam.shared.domain.models import Standard
from sangam.shared.domain.onboarding import (
    SCHOOL_ERROR,
    STANDARD_ERROR_KEY,
    TERMS_ERROR_KEY,
    USERNAME_ERROR,
    OnboardingForm,
)


def filled_form():
    form = OnboardingForm()
    form.username = "Meera Joshi"
    form.school = "Shivaji High School"
    form.terms_agreed = True
    return form


def test_empty_step_one_reports_every_field():
    form = OnboardingForm()
    assert form.next_step() is False
    assert form.step == 1
    assert form.errors == {"username": USERNAME_ERROR, "school": SCHOOL_ERROR, "terms": TERMS_ERROR_KEY}
    assert form.shaking == {"username", "school", "terms"}


def test_username_rules():
    form = filled_form()
    for bad in ("abc", "   ab   ", "Meera99", "Meera_J"):
        form.username = bad
        assert not form.validate_step_one(), bad
        assert form.error_for("username") == USERNAME_ERROR
    form.username = "Ab Cd"
    assert form.validate_step_one()
    assert form.error_for("username") is None


def test_valid_step_one_advances_and_clears_errors():
    form = filled_form()
    form.school = " "
    form.next_step()
    form.school = "Shivaji High School"

    assert form.next_step()
    assert form.step == 2
    assert form.error_for("school") is None


def test_submit_requires_standard():
    form = filled_form()
    form.next_step()

    assert form.submit() is None
    assert form.errors == {"standard": STANDARD_ERROR_KEY}
    assert "standard" in form.shaking


def test_submit_builds_profile():
    form = filled_form()
    form.next_step()
    form.standard = "10th"

    profile = form.submit()

    assert profile.username == "Meera Joshi"
    assert profile.standard == Standard.TENTH
    assert form.errors == {}


def test_clear_shake_and_previous_step():
    form = OnboardingForm()
    form.next_step()
    form.clear_shake("username")
    assert "username" not in form.shaking

    form = filled_form()
    form.next_step()
    form.previous_step()
    assert form.step == 1
