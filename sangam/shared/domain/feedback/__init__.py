from .service import (
    MAX_FEEDBACK_LENGTH,
    MIN_FEEDBACK_LENGTH,
    FeedbackResult,
    FeedbackService,
    is_valid_feedback,
)

__all__ = [
    "FeedbackResult",
    "FeedbackService",
    "MAX_FEEDBACK_LENGTH",
    "MIN_FEEDBACK_LENGTH",
    "is_valid_feedback",
]
