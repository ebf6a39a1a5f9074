"""
Shared Infrastructure Module
=============================

Technical adapters for external systems (local store, remote documents, translation).
"""

# Persistence
from sangam.shared.infrastructure.persistence import LocalStore

# Remote
from sangam.shared.infrastructure.remote import (
    RemoteBackend,
    RemoteStore,
    connect_backend,
)

# Translation
from sangam.shared.infrastructure.llm import (
    ProviderFactory,
    TranslationError,
    Translator,
)

__all__ = [
    # Persistence
    "LocalStore",
    # Remote
    "RemoteBackend",
    "RemoteStore",
    "connect_backend",
    # Translation
    "ProviderFactory",
    "TranslationError",
    "Translator",
]
