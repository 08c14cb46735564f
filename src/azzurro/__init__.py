"""Minimal inversion-of-control runtime.

An application is made of named modules. Each module declares the modules it
depends on and registers services built by one of three recipes (class,
factory callback, provider). The injector resolves the module graph of the
application root and builds services lazily, at most once.

Exports:
- `AzzurroFramework`: the runtime; `get_instance()` returns the process-wide one.
- `app`, `module`, `bootstrap`, `version`: shortcuts to the process-wide runtime.
- `Injector`, `ModuleRegistry`, `ModuleHandle`: resolution engine and registry.
- `ServiceProvider`: protocol expected from providers (a `register()` method).
- the error classes, all subclasses of `AzzurroError`.
"""

from ._application import AzzurroFramework, app, bootstrap, get_instance, module, version
from ._errors import (
    AppAlreadyRegisteredError,
    AppModuleNotRegisteredError,
    AzzurroError,
    CircularDependencyError,
    InvalidNameError,
    ModuleAlreadyRegisteredError,
    ModuleNotResolvedError,
    ResolutionError,
    ServiceConstructionError,
    ServiceNotFoundError,
    UnknownModuleError,
)
from ._injector import Injector
from ._module import ModuleHandle, ModuleRegistry
from ._recipes import FactoryRecipe, ProviderRecipe, Recipe, RecipeKind, ServiceProvider, ServiceRecipe
from ._version import __version__


__all__ = [
    "AppAlreadyRegisteredError",
    "AppModuleNotRegisteredError",
    "AzzurroError",
    "AzzurroFramework",
    "CircularDependencyError",
    "FactoryRecipe",
    "Injector",
    "InvalidNameError",
    "ModuleAlreadyRegisteredError",
    "ModuleHandle",
    "ModuleNotResolvedError",
    "ModuleRegistry",
    "ProviderRecipe",
    "Recipe",
    "RecipeKind",
    "ResolutionError",
    "ServiceConstructionError",
    "ServiceNotFoundError",
    "ServiceProvider",
    "ServiceRecipe",
    "UnknownModuleError",
    "__version__",
    "app",
    "bootstrap",
    "get_instance",
    "module",
    "version",
]
