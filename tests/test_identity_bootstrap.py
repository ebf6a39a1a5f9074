"""Tests for the identity bootstrap state machine."""

import asyncio

import pytest

from sangam.shared.core.tasks import BackgroundTasks
from sangam.shared.domain.identity import BootstrapState, IdentityBootstrap
from sangam.shared.domain.models import IdentityHandle, IdentityKind

from tests.fakes import CountingIdentityProvider, FailingIdentityProvider, make_backend


def test_no_backend_resolves_disconnected_synchronously():
    bootstrap = IdentityBootstrap(backend=None)
    seen = []
    bootstrap.subscribe(seen.append)

    bootstrap.start()

    assert bootstrap.state == BootstrapState.DISCONNECTED
    assert bootstrap.identity == IdentityHandle.disconnected()
    assert bootstrap.identity.user_id == "offline_user"
    assert seen == [IdentityHandle.disconnected()]


def test_late_subscriber_gets_current_identity_replayed():
    bootstrap = IdentityBootstrap(backend=None)
    bootstrap.start()
    seen = []
    bootstrap.subscribe(seen.append)
    assert seen == [IdentityHandle.disconnected()]


@pytest.mark.asyncio
async def test_anonymous_sign_in_when_no_token():
    provider = CountingIdentityProvider()
    tasks = BackgroundTasks("test")
    bootstrap = IdentityBootstrap(make_backend(identity=provider), tasks=tasks)
    acquired = []
    bootstrap.on_acquired(acquired.append)

    bootstrap.start()
    assert bootstrap.state == BootstrapState.PENDING

    handle = await asyncio.wait_for(bootstrap.wait_resolved(), timeout=1)

    assert handle == IdentityHandle.remote("anon-1")
    assert bootstrap.state == BootstrapState.IDENTIFIED
    assert acquired == [handle]
    assert provider.anonymous_attempts == 1


@pytest.mark.asyncio
async def test_bootstrap_token_is_redeemed_once():
    provider = CountingIdentityProvider(valid_tokens={"one-time": "user-42"})
    tasks = BackgroundTasks("test")
    bootstrap = IdentityBootstrap(make_backend(identity=provider), bootstrap_token="one-time", tasks=tasks)

    bootstrap.start()
    handle = await asyncio.wait_for(bootstrap.wait_resolved(), timeout=1)

    assert handle.user_id == "user-42"
    assert provider.redeemed_tokens == {"one-time"}
    assert provider.anonymous_attempts == 0


@pytest.mark.asyncio
async def test_sign_in_failure_resolves_failed_without_retry():
    provider = FailingIdentityProvider()
    tasks = BackgroundTasks("test")
    bootstrap = IdentityBootstrap(make_backend(identity=provider), bootstrap_token="bad", tasks=tasks)

    bootstrap.start()
    handle = await asyncio.wait_for(bootstrap.wait_resolved(), timeout=1)
    await tasks.wait_idle()

    assert handle.kind == IdentityKind.FAILED
    assert handle.user_id == "auth_failed"
    # The token failure does not fall through to anonymous sign-in
    assert provider.token_attempts == ["bad"]
    assert provider.anonymous_attempts == 0

    # A later "signed out" notification does not trigger another attempt
    provider._set_user(None)
    await tasks.wait_idle()
    assert provider.anonymous_attempts == 0
    assert bootstrap.state == BootstrapState.FAILED


@pytest.mark.asyncio
async def test_replayed_notifications_do_not_reacquire():
    provider = CountingIdentityProvider()
    tasks = BackgroundTasks("test")
    bootstrap = IdentityBootstrap(make_backend(identity=provider), tasks=tasks)
    acquired = []
    bootstrap.on_acquired(acquired.append)

    bootstrap.start()
    await asyncio.wait_for(bootstrap.wait_resolved(), timeout=1)
    provider.replay()
    provider.replay()

    assert len(acquired) == 1


@pytest.mark.asyncio
async def test_sign_out_after_identified_keeps_identity():
    provider = CountingIdentityProvider()
    tasks = BackgroundTasks("test")
    bootstrap = IdentityBootstrap(make_backend(identity=provider), tasks=tasks)

    bootstrap.start()
    handle = await asyncio.wait_for(bootstrap.wait_resolved(), timeout=1)
    provider._set_user(None)
    await tasks.wait_idle()

    assert bootstrap.identity == handle
    assert provider.anonymous_attempts == 1


def test_start_is_idempotent():
    bootstrap = IdentityBootstrap(backend=None)
    seen = []
    bootstrap.subscribe(seen.append)
    bootstrap.start()
    bootstrap.start()
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_close_detaches_from_provider():
    provider = CountingIdentityProvider()
    tasks = BackgroundTasks("test")
    bootstrap = IdentityBootstrap(make_backend(identity=provider), tasks=tasks)
    bootstrap.start()
    bootstrap.close()
    await tasks.cancel_all()

    provider._set_user("someone")
    assert bootstrap.identity is None
