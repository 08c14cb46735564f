from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence


class AzzurroError(RuntimeError):
    """Base class of every error raised by the runtime."""


class InvalidNameError(AzzurroError, ValueError):
    pass


class UnknownModuleError(AzzurroError, LookupError):
    def __init__(self, module: str) -> None:
        super().__init__(f"Module '{module}' has not been registered!")
        self.module = module


class ModuleAlreadyRegisteredError(AzzurroError):
    pass


class AppAlreadyRegisteredError(ModuleAlreadyRegisteredError):
    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"App module has been already registered as '{current}' (requested '{requested}')!")
        self.current = current
        self.requested = requested


class AppModuleNotRegisteredError(AzzurroError):
    pass


class CircularDependencyError(AzzurroError):
    """A module (or a service under construction) depends on itself.

    `cycle` holds the path, starting and ending with the repeated name.
    """

    def __init__(self, cycle: Sequence[str], kind: str = "module") -> None:
        super().__init__(f"Circular {kind} dependency: {' -> '.join(cycle)}")
        self.cycle = list(cycle)
        self.kind = kind


class ServiceNotFoundError(AzzurroError, LookupError):
    def __init__(self, service: str) -> None:
        super().__init__(f"Service '{service}' is not declared by any module!")
        self.service = service


class ModuleNotResolvedError(AzzurroError):
    def __init__(self, service: str, modules: Sequence[str]) -> None:
        super().__init__(
            f"Service '{service}' is declared by {', '.join(repr(m) for m in modules)} "
            "but none of them has been resolved for the current application."
        )
        self.service = service
        self.modules = list(modules)


class ServiceConstructionError(AzzurroError):
    def __init__(self, service: str, module: str, cause: BaseException) -> None:
        super().__init__(f"Cannot build service '{service}' of module '{module}': {cause}")
        self.service = service
        self.module = module


class ResolutionError(AzzurroError):
    """A constructor parameter could not be satisfied."""
