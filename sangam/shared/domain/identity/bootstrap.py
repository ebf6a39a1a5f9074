"""Identity bootstrap state machine.

``UNSTARTED -> PENDING -> IDENTIFIED | DISCONNECTED | FAILED``

The bootstrap runs once per process. It never retries: a failed sign-in leaves
the session on the ``auth_failed`` sentinel and all sync stays local.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Set

from sangam.shared.core.channel import Channel, Unsubscribe
from sangam.shared.core.tasks import BackgroundTasks
from sangam.shared.domain.models import IdentityHandle
from sangam.shared.infrastructure.remote.base import RemoteBackend

logger = logging.getLogger(__name__)


class BootstrapState(str, Enum):
    UNSTARTED = "unstarted"
    PENDING = "pending"
    IDENTIFIED = "identified"
    DISCONNECTED = "disconnected"
    FAILED = "failed"


TERMINAL_SENTINELS = (BootstrapState.DISCONNECTED, BootstrapState.FAILED)


class IdentityBootstrap:
    """Establishes which identity the session operates as.

    Listeners registered with :meth:`subscribe` see every resolved handle;
    listeners registered with :meth:`on_acquired` are called exactly once per
    remote user id, which is where the one-shot reconcile pass hangs off.
    """

    def __init__(
        self,
        backend: Optional[RemoteBackend],
        bootstrap_token: Optional[str] = None,
        tasks: Optional[BackgroundTasks] = None,
    ) -> None:
        self._backend = backend
        self._bootstrap_token = bootstrap_token or None
        self._tasks = tasks or BackgroundTasks("identity")

        self.state = BootstrapState.UNSTARTED
        self.identity: Optional[IdentityHandle] = None

        self._changes: Channel[IdentityHandle] = Channel("identity.changes")
        self._acquisitions: Channel[IdentityHandle] = Channel("identity.acquired")
        self._acquired_uids: Set[str] = set()
        self._sign_in_started = False
        self._provider_unsubscribe: Optional[Unsubscribe] = None
        self._resolved = asyncio.Event()

    # ------------------------------------------------------------------ #
    # Observers
    # ------------------------------------------------------------------ #

    def subscribe(self, listener: Callable[[IdentityHandle], None]) -> Unsubscribe:
        """Register for identity changes; the current handle is replayed if known."""
        unsubscribe = self._changes.subscribe(listener)
        if self.identity is not None:
            listener(self.identity)
        return unsubscribe

    def on_acquired(self, listener: Callable[[IdentityHandle], None]) -> Unsubscribe:
        return self._acquisitions.subscribe(listener)

    async def wait_resolved(self) -> IdentityHandle:
        """Wait for the first resolved identity. May never return if the backend stalls."""
        await self._resolved.wait()
        assert self.identity is not None
        return self.identity

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def start(self) -> None:
        """Begin the bootstrap. Returns immediately; sign-in runs in the background."""
        if self.state != BootstrapState.UNSTARTED:
            logger.debug(f"Identity bootstrap already started ({self.state.value})")
            return

        if self._backend is None:
            logger.info("No remote backend configured; operating disconnected")
            self._resolve(BootstrapState.DISCONNECTED, IdentityHandle.disconnected())
            return

        self.state = BootstrapState.PENDING
        logger.info(f"Identity bootstrap started against '{self._backend.name}' backend")
        self._provider_unsubscribe = self._backend.identity.subscribe(self._on_provider_change)

    def close(self) -> None:
        if self._provider_unsubscribe is not None:
            self._provider_unsubscribe()
            self._provider_unsubscribe = None
        self._changes.clear()
        self._acquisitions.clear()

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _on_provider_change(self, uid: Optional[str]) -> None:
        if self.state in TERMINAL_SENTINELS:
            logger.debug(f"Ignoring identity notification after {self.state.value}")
            return

        if uid is None:
            if self.state == BootstrapState.IDENTIFIED:
                # Keep the established identity for the rest of the session
                return
            if not self._sign_in_started:
                self._sign_in_started = True
                self._tasks.spawn(self._sign_in(), label="identity.sign_in")
            return

        if uid in self._acquired_uids:
            return
        self._acquired_uids.add(uid)

        handle = IdentityHandle.remote(uid)
        logger.info(f"Identity acquired: {uid}")
        self._resolve(BootstrapState.IDENTIFIED, handle)
        self._acquisitions.emit(handle)

    async def _sign_in(self) -> None:
        assert self._backend is not None
        provider = self._backend.identity

        # The token is single use whatever the outcome
        token, self._bootstrap_token = self._bootstrap_token, None
        try:
            if token:
                logger.info("Redeeming bootstrap token")
                await provider.sign_in_with_token(token)
            else:
                logger.info("Creating anonymous identity")
                await provider.sign_in_anonymously()
        except Exception as e:
            logger.error(f"Identity bootstrap failed: {e}")
            if self.state == BootstrapState.PENDING:
                self._resolve(BootstrapState.FAILED, IdentityHandle.failed())

    def _resolve(self, state: BootstrapState, handle: IdentityHandle) -> None:
        self.state = state
        self.identity = handle
        self._resolved.set()
        self._changes.emit(handle)
