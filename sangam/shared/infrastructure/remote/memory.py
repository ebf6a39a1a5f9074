"""In-process remote backend.

Behaves like the hosted document service (identity-scoped documents, merge
writes, append-only collections) without a network. Selected with
``{"backend": "memory"}`` in the connection blob, which makes it the local
emulator for development.
"""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional, Set

from sangam.shared.infrastructure.remote.base import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    IdentityError,
    IdentityProvider,
    RemoteBackend,
)


def _resolve_sentinels(data: Document) -> Document:
    now = datetime.now(timezone.utc).isoformat()
    return {key: (now if value is SERVER_TIMESTAMP else copy.deepcopy(value)) for key, value in data.items()}


class InMemoryIdentityProvider(IdentityProvider):
    def __init__(self, valid_tokens: Optional[Dict[str, str]] = None) -> None:
        super().__init__()
        # token -> uid
        self._valid_tokens: Dict[str, str] = dict(valid_tokens or {})
        self.redeemed_tokens: Set[str] = set()

    async def _redeem_token(self, token: str) -> str:
        if token in self.redeemed_tokens or token not in self._valid_tokens:
            raise IdentityError("Bootstrap token rejected")
        self.redeemed_tokens.add(token)
        return self._valid_tokens[token]

    async def _create_anonymous(self) -> str:
        return f"anon-{uuid.uuid4().hex[:20]}"


class InMemoryDocumentStore(DocumentStore):
    def __init__(self) -> None:
        self.documents: Dict[str, Document] = {}
        self.collections: Dict[str, Dict[str, Document]] = {}

    async def get(self, path: str) -> Optional[Document]:
        document = self.documents.get(path)
        return copy.deepcopy(document) if document is not None else None

    async def set(self, path: str, data: Document, merge: bool = False) -> None:
        resolved = _resolve_sentinels(data)
        if merge and path in self.documents:
            self.documents[path].update(resolved)
        else:
            self.documents[path] = resolved

    async def add(self, collection: str, data: Document) -> str:
        document_id = uuid.uuid4().hex
        self.collections.setdefault(collection, {})[document_id] = _resolve_sentinels(data)
        return document_id


def create_memory_backend(valid_tokens: Optional[Dict[str, str]] = None) -> RemoteBackend:
    return RemoteBackend(
        identity=InMemoryIdentityProvider(valid_tokens),
        documents=InMemoryDocumentStore(),
        name="memory",
    )
