"""Remote backend contracts.

The remote side is an opaque key/value document service reachable only through
get/set/merge/add, plus an identity provider that reports sign-in changes
through a ``subscribe -> unsubscribe`` channel.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from sangam.shared.core.channel import Channel, Unsubscribe

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class _ServerTimestamp:
    """Placeholder resolved to the server clock when a document is written."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


class RemoteError(Exception):
    """Base class for remote backend failures."""


class IdentityError(RemoteError):
    """Token redemption or anonymous sign-in failed."""


class DocumentStoreError(RemoteError):
    """A document read or write failed."""


class RemoteUnavailableError(DocumentStoreError):
    """The document service could not be reached at all."""


class IdentityProvider(ABC):
    """Issues identities and reports identity changes.

    Subclasses implement the two sign-in calls; this base class owns the
    notification channel. A new subscriber immediately receives the current
    user id (``None`` when nobody is signed in).
    """

    def __init__(self) -> None:
        self._changes: Channel[Optional[str]] = Channel("identity.provider")
        self._current_uid: Optional[str] = None

    @property
    def current_uid(self) -> Optional[str]:
        return self._current_uid

    def subscribe(self, listener: Callable[[Optional[str]], None]) -> Unsubscribe:
        unsubscribe = self._changes.subscribe(listener)
        listener(self._current_uid)
        return unsubscribe

    def _set_user(self, uid: Optional[str]) -> None:
        self._current_uid = uid
        self._changes.emit(uid)

    async def sign_in_with_token(self, token: str) -> str:
        uid = await self._redeem_token(token)
        self._set_user(uid)
        return uid

    async def sign_in_anonymously(self) -> str:
        uid = await self._create_anonymous()
        self._set_user(uid)
        return uid

    @abstractmethod
    async def _redeem_token(self, token: str) -> str:
        """Exchange a one-time bootstrap token for a user id."""

    @abstractmethod
    async def _create_anonymous(self) -> str:
        """Create a fresh anonymous identity and return its user id."""


class DocumentStore(ABC):
    """Path-addressed JSON documents."""

    @abstractmethod
    async def get(self, path: str) -> Optional[Document]:
        """Return the document at ``path`` or ``None`` if it does not exist."""

    @abstractmethod
    async def set(self, path: str, data: Document, merge: bool = False) -> None:
        """Write ``data`` at ``path``; ``merge`` updates only the given fields."""

    @abstractmethod
    async def add(self, collection: str, data: Document) -> str:
        """Append ``data`` to ``collection`` and return the new document id."""


class RemoteBackend:
    """A connected identity provider and document store pair."""

    def __init__(self, identity: IdentityProvider, documents: DocumentStore, name: str = "remote"):
        self.identity = identity
        self.documents = documents
        self.name = name

    async def close(self) -> None:
        """Release transport resources. The default backend holds none."""
