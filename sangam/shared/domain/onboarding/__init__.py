from .form import (
    SCHOOL_ERROR,
    STANDARD_ERROR_KEY,
    STANDARD_OPTIONS,
    TERMS_ERROR_KEY,
    USERNAME_ERROR,
    OnboardingForm,
)

__all__ = [
    "OnboardingForm",
    "SCHOOL_ERROR",
    "STANDARD_ERROR_KEY",
    "STANDARD_OPTIONS",
    "TERMS_ERROR_KEY",
    "USERNAME_ERROR",
]
