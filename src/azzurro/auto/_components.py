from __future__ import annotations

import inspect
import logging
import threading
from typing import TYPE_CHECKING, Any

from .._names import validate_name
from .._recipes import Constructor


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from .._injector import Injector


class ComponentRegistry:
    """Named components looked up by the routing layer.

    Classes are built on first `get` with the same constructor injection as
    services, then kept; anything else is returned as registered.
    """

    kind = "component"

    def __init__(self, injector: Injector) -> None:
        self._injector = injector
        self._components: dict[str, Any] = {}
        self._instances: dict[str, Any] = {}
        self._lock = threading.RLock()

    def register(self, name: str, component: Any) -> None:
        validate_name(name, self.kind)
        with self._lock:
            self._components[name] = component
            self._instances.pop(name, None)
        logger.debug("registered %s '%s'", self.kind, name)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._components

    def get(self, name: str) -> Any:
        with self._lock:
            if name in self._instances:
                return self._instances[name]

            try:
                component = self._components[name]
            except KeyError:
                msg = f"No {self.kind} registered as '{name}'"
                raise KeyError(msg) from None

            if inspect.isclass(component):
                component = Constructor(self._injector).construct(component)

            self._instances[name] = component
            return component
