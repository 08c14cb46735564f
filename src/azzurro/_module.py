from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from ._errors import AppAlreadyRegisteredError, UnknownModuleError
from ._names import validate_dependencies, validate_name
from ._recipes import FactoryRecipe, ProviderRecipe, Recipe, ServiceProvider, ServiceRecipe


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence


@dataclass
class Module:
    name: str
    dependencies: tuple[str, ...]
    services: dict[str, Recipe] = field(default_factory=dict)


class ModuleHandle:
    """Public view of a declared module, used to register its services.

    Every registration method returns the handle so calls can be chained:

      af.module("shop", ["auto"]).service("cart", Cart).factory("db", make_db)
    """

    def __init__(self, module: Module, registry: ModuleRegistry) -> None:
        self._module = module
        self._registry = registry

    @property
    def name(self) -> str:
        return self._module.name

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self._module.dependencies

    @property
    def services(self) -> Mapping[str, Recipe]:
        return MappingProxyType(self._module.services)

    def service(self, name: str, cls: type) -> ModuleHandle:
        """Register a class built by calling it on first lookup."""
        return self._register(name, ServiceRecipe(cls))

    def factory(self, name: str, callback: Callable[..., object]) -> ModuleHandle:
        """Register a callback invoked once on first lookup (receives the injector if it takes an argument)."""
        return self._register(name, FactoryRecipe(callback))

    def provider(self, name: str, provider: type[ServiceProvider] | ServiceProvider) -> ModuleHandle:
        """Register a provider whose `register()` result becomes the service."""
        return self._register(name, ProviderRecipe(provider))

    def _register(self, name: str, recipe: Recipe) -> ModuleHandle:
        validate_name(name, "service")
        self._registry.add_recipe(self._module.name, name, recipe)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleHandle):
            return NotImplemented
        return self._module is other._module

    def __hash__(self) -> int:
        return hash(self._module.name)

    def __repr__(self) -> str:
        return f"ModuleHandle({self.name!r}, dependencies={list(self.dependencies)!r})"


class ModuleRegistry:
    """Module name -> dependencies and recipes. Pure data and validation."""

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}
        self._root: str | None = None
        self._lock = threading.RLock()

    def declare(self, name: str, dependencies: Sequence[str] | None = None) -> ModuleHandle:
        """Create the module on first declaration, retrieve it afterwards.

        A dependency list passed for an existing module is ignored: the list given
        at creation stays authoritative.
        """
        validate_name(name)
        deps = validate_dependencies(dependencies) if dependencies is not None else None

        with self._lock:
            module = self._modules.get(name)
            if module is None:
                if deps is None:
                    raise UnknownModuleError(name)
                module = self._modules[name] = Module(name=name, dependencies=deps)
                logger.debug("declared module '%s' depending on %s", name, list(deps))
            elif deps is not None and deps != module.dependencies:
                logger.warning(
                    "module '%s' already declared with %s; ignoring %s",
                    name,
                    list(module.dependencies),
                    list(deps),
                )

            return ModuleHandle(module, self)

    def get(self, name: str) -> ModuleHandle:
        return self.declare(name, None)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._modules

    def names(self) -> list[str]:
        with self._lock:
            return list(self._modules)

    def dependencies_of(self, name: str) -> tuple[str, ...]:
        with self._lock:
            module = self._modules.get(name)
            if module is None:
                raise UnknownModuleError(name)
            return module.dependencies

    def add_recipe(self, module: str, service: str, recipe: Recipe) -> None:
        with self._lock:
            services = self._modules[module].services
            if service in services:
                logger.debug("service '%s' of module '%s' replaced by a new %s", service, module, recipe.kind.value)
            services[service] = recipe
            logger.debug("registered %s '%s' in module '%s'", recipe.kind.value, service, module)

    def recipe(self, module: str, service: str) -> Recipe:
        with self._lock:
            return self._modules[module].services[service]

    def find_service(self, service: str) -> list[str]:
        """Names of the modules declaring `service`, in declaration order."""
        with self._lock:
            return [name for name, module in self._modules.items() if service in module.services]

    @property
    def root(self) -> str | None:
        return self._root

    def designate_root(self, name: str) -> None:
        with self._lock:
            if self._root is not None and self._root != name:
                raise AppAlreadyRegisteredError(self._root, name)
            if self._root is None:
                logger.debug("module '%s' designated as application root", name)
            self._root = name

    def check_root(self, name: str) -> None:
        with self._lock:
            if self._root is not None and self._root != name:
                raise AppAlreadyRegisteredError(self._root, name)
