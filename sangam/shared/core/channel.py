"""Typed synchronous subscription channel over FletXr reactives.

Domain components publish their state changes through a ``Channel`` so that
observers can be attached and detached without any knowledge of the backend.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from fletx.core import RxInt

T = TypeVar("T")

Listener = Callable[[T], None]
Unsubscribe = Callable[[], None]

logger = logging.getLogger(__name__)


class Channel(Generic[T]):
    """In-process fan-out of values to subscribed listeners.

    Each ``emit`` bumps a reactive revision counter, so fletx observers fire
    even when the same value is emitted twice in a row. Listeners receive the
    value most recently emitted.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._revision: RxInt = RxInt(0)
        self._latest: Optional[T] = None
        self._observers: Dict[Listener, Any] = {}

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register ``listener`` and return the function that removes it."""
        if listener not in self._observers:
            self._observers[listener] = self._revision.listen(lambda: self._deliver(listener))

        def unsubscribe() -> None:
            observer = self._observers.pop(listener, None)
            if observer is not None:
                observer.dispose()

        return unsubscribe

    def emit(self, value: T) -> None:
        """Deliver ``value`` to every listener.

        A failing listener is logged and does not stop delivery to the rest.
        """
        self._latest = value
        self._revision.value += 1

    def _deliver(self, listener: Listener) -> None:
        try:
            listener(self._latest)
        except Exception:
            listener_name = getattr(listener, "__name__", repr(listener))
            logger.exception(f"Listener '{listener_name}' failed on channel '{self.name}'")

    def clear(self) -> None:
        for observer in self._observers.values():
            observer.dispose()
        self._observers.clear()

    def __len__(self) -> int:
        return len(self._observers)
