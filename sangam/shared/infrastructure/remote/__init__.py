"""
Remote Interface - identity provider and document service adapters.

Supports the hosted HTTP document service and an in-process emulator.
"""

from sangam.shared.infrastructure.remote.base import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    DocumentStoreError,
    IdentityError,
    IdentityProvider,
    RemoteBackend,
    RemoteError,
    RemoteUnavailableError,
)
from sangam.shared.infrastructure.remote.factory import BackendType, connect_backend
from sangam.shared.infrastructure.remote.http import HttpBackend
from sangam.shared.infrastructure.remote.memory import (
    InMemoryDocumentStore,
    InMemoryIdentityProvider,
    create_memory_backend,
)
from sangam.shared.infrastructure.remote.store import RemoteStore, preferences_path, profile_path

__all__ = [
    # Base
    "SERVER_TIMESTAMP",
    "Document",
    "DocumentStore",
    "DocumentStoreError",
    "IdentityError",
    "IdentityProvider",
    "RemoteBackend",
    "RemoteError",
    "RemoteUnavailableError",
    # Factory
    "BackendType",
    "connect_backend",
    # Backends
    "HttpBackend",
    "InMemoryDocumentStore",
    "InMemoryIdentityProvider",
    "create_memory_backend",
    # Identity-scoped store
    "RemoteStore",
    "preferences_path",
    "profile_path",
]
