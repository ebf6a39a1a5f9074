from __future__ import annotations

import pytest

from sangam.shared.core.configuration import SystemConfig
from sangam.shared.infrastructure.persistence import LocalStore

from tests.fakes import ScriptedDocumentStore


@pytest.fixture
def local_store():
    """Fresh in-memory DuckDB store per test."""
    store = LocalStore(":memory:")
    yield store
    store.close()


@pytest.fixture
def documents():
    return ScriptedDocumentStore()


@pytest.fixture
def config():
    """Configuration with the cosmetic onboarding delay removed."""
    return SystemConfig(ui={"onboarding_confirm_delay": 0.0, "document_load_timeout": 0.1})


def put_raw(store: LocalStore, key: str, raw: str) -> None:
    """Store ``raw`` text under ``key`` without JSON encoding."""
    store.conn.execute(
        "INSERT INTO local_kv (key, value) VALUES (?, ?) "
        "ON CONFLICT (key) DO UPDATE SET value = excluded.value",
        [key, raw],
    )
