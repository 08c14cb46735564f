from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable


class EventService:
    """Synchronous event bus (the `event` service of the `auto` module).

    `emit` calls every listener of the event in registration order and only
    returns once all of them have run. A listener raising stops the fan-out
    and the exception reaches the emitter.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Callable[..., Any]]] = {}
        self._lock = threading.RLock()

    def on(self, event: str, listener: Callable[..., Any]) -> Callable[..., Any]:
        if not callable(listener):
            msg = f"listener for '{event}' must be callable, got {listener!r}"
            raise TypeError(msg)

        with self._lock:
            self._listeners.setdefault(event, []).append(listener)
        return listener

    def off(self, event: str, listener: Callable[..., Any] | None = None) -> None:
        """Remove one listener, or all listeners of `event` when none is given."""
        with self._lock:
            if listener is None:
                self._listeners.pop(event, None)
                return
            listeners = self._listeners.get(event, [])
            if listener in listeners:
                listeners.remove(listener)

    def listeners(self, event: str) -> list[Callable[..., Any]]:
        with self._lock:
            return list(self._listeners.get(event, ()))

    def emit(self, event: str, *args: Any, **kwargs: Any) -> None:
        # Snapshot: listeners added while emitting run on the next emission.
        listeners = self.listeners(event)
        logger.debug("emitting '%s' to %d listener(s)", event, len(listeners))
        for listener in listeners:
            listener(*args, **kwargs)
