"""Identity-scoped view over the remote document service."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Dict, Optional, TypeVar

from fletx.core import RxBool

from sangam.shared.infrastructure.remote.base import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    DocumentStoreError,
    RemoteUnavailableError,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")

FEEDBACK_COLLECTION = "feedback"


def preferences_path(user_id: str) -> str:
    return f"users/{user_id}/settings/preferences"


def profile_path(user_id: str) -> str:
    return f"users/{user_id}/settings/profile"


class RemoteStore:
    """Per-user documents: preferences (merged), profile (replaced), feedback (appended).

    ``online`` reflects the outcome of the most recent call: it goes False
    when the service cannot be reached and back to True on any answer,
    including an error answer.
    """

    def __init__(self, documents: DocumentStore) -> None:
        self.documents = documents
        self.online: RxBool = RxBool(True)

    async def _track(self, call: Awaitable[R]) -> R:
        try:
            result = await call
        except RemoteUnavailableError:
            self._set_online(False)
            raise
        except DocumentStoreError:
            self._set_online(True)
            raise
        self._set_online(True)
        return result

    def _set_online(self, value: bool) -> None:
        if self.online.value != value:
            logger.info(f"Remote service {'reachable' if value else 'unreachable'}")
            self.online.value = value

    async def fetch_preferences(self, user_id: str) -> Optional[Document]:
        return await self._track(self.documents.get(preferences_path(user_id)))

    async def merge_preferences(self, user_id: str, fields: Document) -> None:
        logger.debug(f"Merging preference fields {sorted(fields)} for {user_id}")
        await self._track(self.documents.set(preferences_path(user_id), fields, merge=True))

    async def fetch_profile(self, user_id: str) -> Optional[Document]:
        return await self._track(self.documents.get(profile_path(user_id)))

    async def replace_profile(self, user_id: str, profile: Document) -> None:
        await self._track(self.documents.set(profile_path(user_id), profile, merge=False))

    async def add_feedback(
        self,
        user_id: str,
        profile: Optional[Dict[str, Any]],
        feedback: str,
        app_version: str,
    ) -> str:
        return await self._track(
            self.documents.add(
                FEEDBACK_COLLECTION,
                {
                    "userId": user_id,
                    "profile": profile,
                    "feedback": feedback,
                    "timestamp": SERVER_TIMESTAMP,
                    "appVersion": app_version,
                },
            )
        )
