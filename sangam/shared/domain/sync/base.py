"""Shared plumbing for local-first entities mirrored to the remote store."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Generic, Literal, Optional, TypeVar

from sangam.shared.core.channel import Channel, Unsubscribe
from sangam.shared.core.tasks import BackgroundTasks
from sangam.shared.domain.models import IdentityHandle, remote_user_id
from sangam.shared.infrastructure.persistence import LocalStore
from sangam.shared.infrastructure.remote import Document, RemoteStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
ChangeSource = Literal["local", "remote"]


class EntityChange(Generic[T]):
    """A new in-memory value and where it came from."""

    __slots__ = ("value", "source")

    def __init__(self, value: T, source: ChangeSource) -> None:
        self.value = value
        self.source = source

    def __repr__(self) -> str:
        return f"EntityChange(value={self.value!r}, source={self.source!r})"


class SyncedEntity(Generic[T]):
    """In-memory value backed by a LocalStore key and an optional remote document.

    Local writes are synchronous. Remote writes are scheduled on ``tasks`` and
    are at-most-once: failures are logged and never retried.
    """

    entity_name = "entity"

    def __init__(
        self,
        local: LocalStore,
        remote: Optional[RemoteStore],
        local_key: str,
        tasks: Optional[BackgroundTasks] = None,
    ) -> None:
        self.local = local
        self.remote = remote
        self.local_key = local_key
        self.tasks = tasks or BackgroundTasks(f"{self.entity_name}.sync")
        self.changes: Channel[EntityChange[T]] = Channel(f"{self.entity_name}.changes")

    def subscribe(self, listener: Callable[[EntityChange[T]], None]) -> Unsubscribe:
        return self.changes.subscribe(listener)

    def _persist_local(self, document: Document) -> bool:
        ok = self.local.write(self.local_key, document)
        if not ok:
            logger.warning(f"Local {self.entity_name} write failed; keeping in-memory value")
        return ok

    def _remote_target(self, identity: Optional[IdentityHandle]) -> Optional[str]:
        """User id for remote calls, or None when sync is local-only."""
        if self.remote is None:
            return None
        return remote_user_id(identity)

    async def _fetch_remote(
        self,
        fetch: Callable[[str], Awaitable[Optional[Document]]],
        user_id: str,
    ) -> Optional[Document]:
        try:
            document = await fetch(user_id)
        except Exception as e:
            logger.warning(f"Remote {self.entity_name} fetch failed for {user_id}; keeping local values: {e}")
            return None
        if document is None:
            logger.debug(f"No remote {self.entity_name} document for {user_id}")
        return document

    def _push_remote(self, write: Callable[[], Awaitable[Any]], user_id: str) -> None:
        self.tasks.spawn(self._guarded_write(write, user_id), label=f"{self.entity_name}.remote_write")

    async def _guarded_write(self, write: Callable[[], Awaitable[Any]], user_id: str) -> None:
        try:
            await write()
            logger.debug(f"Remote {self.entity_name} write for {user_id} completed")
        except Exception as e:
            logger.error(f"Remote {self.entity_name} write for {user_id} failed: {e}")
