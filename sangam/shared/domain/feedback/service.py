"""User feedback submission."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel

from sangam.shared.domain.models import IdentityHandle, UserProfile, remote_user_id
from sangam.shared.infrastructure.remote import RemoteStore

logger = logging.getLogger(__name__)

MIN_FEEDBACK_LENGTH = 10
MAX_FEEDBACK_LENGTH = 1000


class FeedbackResult(BaseModel):
    accepted: bool
    document_id: Optional[str] = None


def is_valid_feedback(text: str) -> bool:
    return MIN_FEEDBACK_LENGTH <= len(text.strip()) and len(text) <= MAX_FEEDBACK_LENGTH


class FeedbackService:
    """Appends feedback to the remote collection, best effort.

    Accepted feedback is reported as accepted to the user even when it could not
    be delivered; delivery failures are only logged.
    """

    def __init__(self, remote: Optional[RemoteStore], app_version: str = "1.0.0") -> None:
        self.remote = remote
        self.app_version = app_version

    async def submit(
        self,
        text: str,
        identity: Optional[IdentityHandle],
        profile: Optional[UserProfile],
    ) -> FeedbackResult:
        if not is_valid_feedback(text):
            return FeedbackResult(accepted=False)

        user_id = remote_user_id(identity)
        if self.remote is None or user_id is None:
            logger.info("Feedback not sent: no remote identity")
            return FeedbackResult(accepted=True)

        try:
            document_id = await self.remote.add_feedback(
                user_id=user_id,
                profile=profile.to_document() if profile else None,
                feedback=text,
                app_version=self.app_version,
            )
        except Exception as e:
            logger.error(f"Error submitting feedback: {e}")
            return FeedbackResult(accepted=True)

        logger.info(f"Feedback submitted as {document_id}")
        return FeedbackResult(accepted=True, document_id=document_id)
