"""Two-step onboarding form state.

Step 1 collects username, school and terms agreement; step 2 collects the
standard. Validation is field scoped: each failing field gets a message and is
added to ``shaking`` so the view can play its attention animation.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Set

from pydantic import ValidationError

from sangam.shared.domain.models import USERNAME_MIN_LENGTH, USERNAME_PATTERN, Standard, UserProfile

logger = logging.getLogger(__name__)

USERNAME_ERROR = "Username must be at least 4 letters (A-Z, a-z, space only)."
SCHOOL_ERROR = "School name cannot be empty."
# Localised through the string table by the view
TERMS_ERROR_KEY = "onboarding_terms_error"
STANDARD_ERROR_KEY = "standard_error"

STANDARD_OPTIONS = [standard.value for standard in Standard]


class OnboardingForm:
    def __init__(self) -> None:
        self.step = 1
        self.username = ""
        self.school = ""
        self.standard: Optional[str] = None
        self.terms_agreed = False
        self.errors: Dict[str, Optional[str]] = {}
        self.shaking: Set[str] = set()

    def validate_step_one(self) -> bool:
        errors: Dict[str, Optional[str]] = {
            "username": None,
            "school": None,
            "terms": None,
        }

        username = self.username.strip()
        if len(username) < USERNAME_MIN_LENGTH or not USERNAME_PATTERN.match(self.username):
            errors["username"] = USERNAME_ERROR
        if not self.school.strip():
            errors["school"] = SCHOOL_ERROR
        if not self.terms_agreed:
            errors["terms"] = TERMS_ERROR_KEY

        self.errors.update(errors)
        failed = {field for field, message in errors.items() if message}
        self.shaking |= failed
        return not failed

    def next_step(self) -> bool:
        """Advance to step 2 if step 1 is valid."""
        if not self.validate_step_one():
            return False
        self.step = 2
        return True

    def previous_step(self) -> None:
        self.step = 1

    def submit(self) -> Optional[UserProfile]:
        """Build the profile, or record the field errors and return None."""
        if self.standard not in STANDARD_OPTIONS:
            self.errors = {"standard": STANDARD_ERROR_KEY}
            self.shaking.add("standard")
            return None

        try:
            profile = UserProfile(username=self.username, school=self.school, standard=self.standard)
        except ValidationError as e:
            # Step 1 fields were edited after advancing
            logger.debug(f"Onboarding submit rejected: {e.error_count()} error(s)")
            self.step = 1
            self.validate_step_one()
            return None

        self.errors = {}
        return profile

    def clear_shake(self, field: str) -> None:
        """Called by the view once the animation for ``field`` has finished."""
        self.shaking.discard(field)

    def error_for(self, field: str) -> Optional[str]:
        return self.errors.get(field)
