"""Tests for profile loading, saving and reconciliation."""

import pytest

from sangam.shared.core.tasks import BackgroundTasks
from sangam.shared.domain.models import IdentityHandle, Standard, UserProfile
from sangam.shared.domain.sync import ProfileSync
from sangam.shared.infrastructure.persistence import KEY_USER_PROFILE
from sangam.shared.infrastructure.remote import RemoteStore, profile_path

from tests.conftest import put_raw

USER = IdentityHandle.remote("user-7")
PROFILE = UserProfile(username="Asha Rao", school="Kendriya Vidyalaya", standard=Standard.TENTH)


def make_sync(local, documents=None, tasks=None):
    remote = RemoteStore(documents) if documents is not None else None
    return ProfileSync(local, remote, tasks=tasks or BackgroundTasks("test"))


def test_missing_profile_loads_as_absent(local_store):
    assert make_sync(local_store).load_initial() is None


def test_corrupt_profile_loads_as_absent(local_store):
    put_raw(local_store, KEY_USER_PROFILE, '{"username": "Asha"')
    assert make_sync(local_store).load_initial() is None


def test_invalid_profile_loads_as_absent(local_store):
    local_store.write(KEY_USER_PROFILE, {"username": "A1", "school": "", "standard": "10th"})
    assert make_sync(local_store).load_initial() is None


def test_stored_profile_loads(local_store):
    local_store.write(KEY_USER_PROFILE, PROFILE.to_document())
    sync = make_sync(local_store)
    assert sync.load_initial() == PROFILE
    assert sync.has_stored_profile
    assert sync.username == "Asha Rao"


def test_unknown_standard_still_counts_as_onboarded(local_store):
    local_store.write(KEY_USER_PROFILE, {"username": "Asha Rao", "school": "KV", "standard": "12th"})
    sync = make_sync(local_store)

    assert sync.load_initial() is None
    assert sync.has_stored_profile
    assert sync.username == "Asha Rao"


def test_profile_without_username_is_not_onboarded(local_store):
    local_store.write(KEY_USER_PROFILE, {"username": "  ", "school": "KV", "standard": "10th"})
    sync = make_sync(local_store)
    sync.load_initial()
    assert not sync.has_stored_profile


@pytest.mark.asyncio
async def test_save_replaces_remote_document(local_store, documents):
    documents.documents[profile_path("user-7")] = {"legacy": True}
    tasks = BackgroundTasks("test")
    sync = make_sync(local_store, documents, tasks)

    sync.save(PROFILE, USER)
    assert local_store.read(KEY_USER_PROFILE) == {
        "username": "Asha Rao",
        "school": "Kendriya Vidyalaya",
        "standard": "10th",
    }
    await tasks.wait_idle()

    (_, path, data, merge), = documents.remote_calls()
    assert path == profile_path("user-7")
    assert merge is False
    assert documents.documents[path] == data
    assert "legacy" not in documents.documents[path]


@pytest.mark.asyncio
async def test_reconcile_applies_remote_profile(local_store, documents):
    documents.documents[profile_path("user-7")] = PROFILE.to_document()
    sync = make_sync(local_store, documents)
    sync.load_initial()
    seen = []
    sync.subscribe(seen.append)

    assert await sync.reconcile_remote(USER)
    assert sync.current == PROFILE
    assert local_store.read(KEY_USER_PROFILE)["username"] == "Asha Rao"
    assert seen[0].source == "remote"


@pytest.mark.asyncio
async def test_reconcile_keeps_local_on_invalid_remote(local_store, documents):
    local_store.write(KEY_USER_PROFILE, PROFILE.to_document())
    documents.documents[profile_path("user-7")] = {"username": "x"}
    sync = make_sync(local_store, documents)
    sync.load_initial()

    assert await sync.reconcile_remote(USER) is False
    assert sync.current == PROFILE


@pytest.mark.asyncio
async def test_remote_failure_does_not_raise(local_store, documents):
    documents.fail_get = True
    documents.fail_set = True
    tasks = BackgroundTasks("test")
    sync = make_sync(local_store, documents, tasks)

    assert await sync.reconcile_remote(USER) is False
    sync.save(PROFILE, USER)
    await tasks.wait_idle()
    assert sync.current == PROFILE
