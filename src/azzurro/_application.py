from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, ClassVar

from ._errors import AppModuleNotRegisteredError
from ._injector import Injector
from ._module import ModuleHandle, ModuleRegistry
from ._names import validate_name
from ._version import __version__
from .auto import (
    AzzurroServiceProvider,
    ControllerService,
    EventService,
    FilterService,
    InjectorService,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Sequence


class AzzurroFramework:
    """Application runtime: module registry, injector and the boot sequence.

    One instance per process is reached through `get_instance()`; building
    more instances directly gives isolated runtimes (mostly for tests).

    - `app()` declares or retrieves the application root module
    - `module()` declares or retrieves any other module
    - `bootstrap()` resolves the root module and fires the lifecycle events.
    """

    EVENT_STARTED = "AF:started"
    EVENT_ENDED = "AF:ended"
    AUTO_MODULE = "auto"

    _instance: ClassVar[AzzurroFramework | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, *, register_auto_module: bool = True) -> None:
        self._registry = ModuleRegistry()
        self._injector = Injector(self._registry)
        self._booted = False
        self._booting = False
        self._lock = threading.RLock()
        self._auto = register_auto_module

        if register_auto_module:
            self._register_auto_module()

    @classmethod
    def get_instance(cls) -> AzzurroFramework:
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def _reset_instance(cls) -> None:
        with cls._instance_lock:
            cls._instance = None

    @property
    def registry(self) -> ModuleRegistry:
        return self._registry

    @property
    def injector(self) -> Injector:
        return self._injector

    @property
    def booted(self) -> bool:
        return self._booted

    def app(self, name: str, dependencies: Sequence[str] | None = None) -> ModuleHandle:
        """Declare (with `dependencies`) or retrieve (without) the application root module."""
        validate_name(name)
        self._registry.check_root(name)

        module = self.module(name, dependencies)

        if dependencies is not None:
            self._registry.designate_root(name)

        return module

    def module(self, name: str, dependencies: Sequence[str] | None = None) -> ModuleHandle:
        """Declare (with `dependencies`) or retrieve (without) a module."""
        return self._registry.declare(name, dependencies)

    def bootstrap(self) -> None:
        with self._lock:
            root = self._registry.root
            if root is None:
                msg = "App module has not been defined!"
                raise AppModuleNotRegisteredError(msg)

            if self._booted or self._booting:
                logger.debug("application '%s' already booted", root)
                return

            if self._auto:
                self._injector.resolve_application_dependencies(self.AUTO_MODULE)
            self._injector.resolve_application_dependencies(root)

            event = self._injector.get_service("event")
            azzurro = self._injector.get_service("azzurro")

            # Listeners calling bootstrap() again fall into the early return above.
            self._booting = True
            try:
                event.emit(self.EVENT_STARTED)
                event.emit(azzurro.get_route_event())
                event.emit(azzurro.get_callback_event())
                event.emit(self.EVENT_ENDED)
            finally:
                self._booting = False

            self._booted = True
            logger.debug("application '%s' booted", root)

    def version(self) -> str:
        return __version__

    def _register_auto_module(self) -> None:
        auto = self.module(self.AUTO_MODULE, [])

        auto.provider("azzurro", AzzurroServiceProvider)
        auto.factory("controller", ControllerService)
        auto.service("event", EventService)
        auto.factory("filter", FilterService)
        auto.factory("injector", InjectorService)


def get_instance() -> AzzurroFramework:
    return AzzurroFramework.get_instance()


def app(name: str, dependencies: Sequence[str] | None = None) -> ModuleHandle:
    return get_instance().app(name, dependencies)


def module(name: str, dependencies: Sequence[str] | None = None) -> ModuleHandle:
    return get_instance().module(name, dependencies)


def bootstrap() -> None:
    get_instance().bootstrap()


def version() -> str:
    return __version__
