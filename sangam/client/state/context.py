"""Process-wide application context.

Created once at start-up and passed to whatever needs the shared handles. It
owns their teardown, so nothing else caches a connection in module state.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Union

from sangam.shared.core.configuration import SystemConfig
from sangam.shared.core.event_bus import EventBus
from sangam.shared.core.tasks import BackgroundTasks
from sangam.shared.infrastructure.llm import ProviderFactory, Translator
from sangam.shared.infrastructure.persistence import LocalStore
from sangam.shared.infrastructure.remote import RemoteBackend, RemoteStore, connect_backend

logger = logging.getLogger(__name__)

CleanupHandler = Callable[[], Union[None, Awaitable[Any]]]


class AppContext:
    def __init__(
        self,
        config: SystemConfig,
        local: LocalStore,
        backend: Optional[RemoteBackend] = None,
        translator: Optional[Translator] = None,
        bus: Optional[EventBus] = None,
        tasks: Optional[BackgroundTasks] = None,
    ) -> None:
        self.config = config
        self.local = local
        self.backend = backend
        self.translator = translator
        self.bus = bus or EventBus()
        self.tasks = tasks or BackgroundTasks("app")
        self.remote_store: Optional[RemoteStore] = RemoteStore(backend.documents) if backend else None
        self._cleanup_handlers: List[CleanupHandler] = []
        self._closed = False

    @classmethod
    def create(cls, config: SystemConfig, bus: Optional[EventBus] = None) -> "AppContext":
        """Build the context from configuration.

        Never raises for a missing remote configuration or translator key; those
        are supported degraded modes.
        """
        db_path = config.storage.db_path
        local = LocalStore(db_path)

        backend = connect_backend(config.remote)
        translator = ProviderFactory.create_from_config(config.translation)

        logger.info(
            f"AppContext created: local={db_path}, "
            f"remote={backend.name if backend else 'disconnected'}, "
            f"translator={'enabled' if translator else 'disabled'}"
        )
        return cls(config=config, local=local, backend=backend, translator=translator, bus=bus)

    def register_cleanup(self, handler: CleanupHandler) -> None:
        """Run ``handler`` during :meth:`close`, before shared handles are released."""
        self._cleanup_handlers.append(handler)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        for handler in reversed(self._cleanup_handlers):
            try:
                result = handler()
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Cleanup handler failed: {e}")
        self._cleanup_handlers.clear()

        await self.tasks.cancel_all()
        await self.bus.wait_until_idle(timeout=2.0)
        self.bus.clear()

        if self.translator is not None:
            await self.translator.close()
        if self.backend is not None:
            await self.backend.close()
        self.local.close()
        logger.info("AppContext closed")
