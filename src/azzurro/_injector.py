from __future__ import annotations

import inspect
import logging
import threading
from typing import TYPE_CHECKING, Any

from ._errors import (
    CircularDependencyError,
    ModuleNotResolvedError,
    ResolutionError,
    ServiceConstructionError,
    ServiceNotFoundError,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._module import ModuleRegistry
    from ._recipes import Recipe


class Injector:
    """Resolves the module graph of an application and builds services lazily.

    - modules become eligible for lookup through `resolve_application_dependencies`
    - services are built on first `get_service`, at most once, then memoized
    - the registry is shared: modules declared later are visible here.
    """

    def __init__(self, registry: ModuleRegistry) -> None:
        self._registry = registry
        self._resolved: dict[str, None] = {}
        self._instances: dict[tuple[str, str], tuple[Recipe, object]] = {}
        self._constructing: list[str] = []
        self._lock = threading.RLock()

    @property
    def registry(self) -> ModuleRegistry:
        return self._registry

    @property
    def resolved_modules(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._resolved)

    def is_resolved(self, module: str) -> bool:
        with self._lock:
            return module in self._resolved

    def resolve_application_dependencies(self, root: str) -> list[str]:
        """Resolve `root` and its transitive dependencies.

        Depth-first, dependencies visited in declaration order, each module
        placed after everything it depends on. Returns the modules newly
        resolved by this call in that order. Nothing is committed when the
        graph is broken (unknown module or cycle).
        """
        with self._lock:
            done: dict[str, None] = {}
            path: dict[str, None] = {}
            stack: list[tuple[str, Iterator[str]]] = []

            def enter(name: str) -> None:
                if name in self._resolved or name in done:
                    return
                if name in path:
                    grey = list(path)
                    raise CircularDependencyError([*grey[grey.index(name) :], name])

                stack.append((name, iter(self._registry.dependencies_of(name))))
                path[name] = None

            enter(root)
            while stack:
                name, dependencies = stack[-1]
                dependency = next(dependencies, None)
                if dependency is not None:
                    enter(dependency)
                    continue

                stack.pop()
                path.popitem()
                done[name] = None

            self._resolved.update(done)
            order = list(done)
            logger.debug("resolved modules for '%s': %s", root, order)
            return order

    def has_service(self, name: str) -> bool:
        with self._lock:
            return any(module in self._resolved for module in self._registry.find_service(name))

    def get_service(self, name: str) -> Any:
        """Return the instance of service `name`, building it on first request."""
        with self._lock:
            module = self._owner(name)
            recipe = self._registry.recipe(module, name)

            # Return memoized instance if present and still built by the registered recipe
            memo = self._instances.get((module, name))
            if memo is not None and memo[0] is recipe:
                return memo[1]

            if name in self._constructing:
                cycle = [*self._constructing[self._constructing.index(name) :], name]
                raise CircularDependencyError(cycle, kind="service")

            self._constructing.append(name)
            try:
                instance = recipe.build(self)
            except (ServiceConstructionError, CircularDependencyError):
                raise
            except Exception as e:
                logger.debug("building %s '%s' of module '%s' failed: %s", recipe.kind.value, name, module, e)
                raise ServiceConstructionError(name, module, e) from e
            finally:
                self._constructing.pop()

            logger.debug("built %s '%s' of module '%s'", recipe.kind.value, name, module)
            self._instances[(module, name)] = (recipe, instance)
            return instance

    def is_built(self, name: str) -> bool:
        """Whether `name` has a memoized instance built by its current recipe."""
        with self._lock:
            for (module, service), (recipe, _) in self._instances.items():
                if service == name and self._registry.recipe(module, service) is recipe:
                    return True
            return False

    def resolve_param(self, cls: type, name: str, p: inspect.Parameter) -> Any:
        """Resolving constructor param.

        Resolution precedence:
        1. service with the same name
        2. default
        3. error.
        """
        if self.has_service(name):
            return self.get_service(name)

        if p.default is not inspect.Parameter.empty:
            return p.default

        msg = (
            f"Cannot satisfy constructor parameter '{name}' for {cls.__name__}. "
            "No resolved module declares a service with that name and there is no default."
        )
        raise ResolutionError(msg)

    def reset(self) -> None:
        """Forget resolved modules and every memoized instance."""
        with self._lock:
            self._instances.clear()
            self._resolved.clear()
            self._constructing.clear()

    def _owner(self, name: str) -> str:
        declarers = self._registry.find_service(name)
        if not declarers:
            raise ServiceNotFoundError(name)

        # The module resolved last wins: dependents override their dependencies.
        resolved = [module for module in self._resolved if module in declarers]
        if not resolved:
            raise ModuleNotResolvedError(name, declarers)
        return resolved[-1]
