from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Protocol,
    TypeVar,
    runtime_checkable,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    T = TypeVar("T")


class RecipeKind(Enum):
    SERVICE = "service"
    FACTORY = "factory"
    PROVIDER = "provider"


@runtime_checkable
class ServiceProvider(Protocol):
    """Anything with a `register()` step that yields the service instance."""

    def register(self) -> object: ...


class ParameterResolver(Protocol):
    def resolve_param(self, cls: type, name: str, p: inspect.Parameter) -> Any: ...


@dataclass
class Recipe(ABC):
    """How to build one named service.

    Built instances are memoized by the injector, keyed by module and service
    name; recipes only know how to build.
    """

    kind: ClassVar[RecipeKind]

    @abstractmethod
    def build(self, resolver: Any) -> object: ...


@dataclass
class ServiceRecipe(Recipe):
    kind: ClassVar[RecipeKind] = RecipeKind.SERVICE

    cls: type

    def __post_init__(self) -> None:
        if not inspect.isclass(self.cls):
            msg = f"service recipe needs a class, got {self.cls!r}"
            raise TypeError(msg)

    def build(self, resolver: Any) -> object:
        return Constructor(resolver).construct(self.cls)


@dataclass
class FactoryRecipe(Recipe):
    kind: ClassVar[RecipeKind] = RecipeKind.FACTORY

    callback: Callable[..., object]

    def __post_init__(self) -> None:
        if not callable(self.callback):
            msg = f"factory recipe needs a callable, got {self.callback!r}"
            raise TypeError(msg)

    def build(self, resolver: Any) -> object:
        if _accepts_positional(self.callback):
            return self.callback(resolver)
        return self.callback()


@dataclass
class ProviderRecipe(Recipe):
    """Builds the provider (class) or takes it as is (instance), then calls `register()` once."""

    kind: ClassVar[RecipeKind] = RecipeKind.PROVIDER

    provider: type[ServiceProvider] | ServiceProvider

    def __post_init__(self) -> None:
        impl = self.provider if inspect.isclass(self.provider) else type(self.provider)
        _validate_provider(impl)

    def build(self, resolver: Any) -> object:
        if inspect.isclass(self.provider):
            provider = Constructor(resolver).construct(self.provider)
        else:
            provider = self.provider
        return provider.register()


def _accepts_positional(func: Callable[..., object]) -> bool:
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins without a signature: assume nullary
        return False

    for p in sig.parameters.values():
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL):
            return True
    return False


def _validate_provider(impl: type) -> None:
    """Best-effort structural check against `ServiceProvider`."""
    register = getattr(impl, "register", None)
    if register is None:
        msg = f"Provider {impl.__name__} does not structurally conform to ServiceProvider: missing members: register"
        raise TypeError(msg)

    if not callable(register):
        msg = f"Provider {impl.__name__} does not structurally conform to ServiceProvider: register: not Callable"
        raise TypeError(msg)

    try:
        sig = inspect.signature(register)
    except (TypeError, ValueError):
        return

    required = [
        p
        for p in sig.parameters.values()
        if p.name != "self"
        and p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)
        and p.default is p.empty
    ]
    if required:
        msg = (
            f"Provider {impl.__name__} does not structurally conform to ServiceProvider: "
            f"register() must not require arguments (requires {', '.join(p.name for p in required)})"
        )
        raise TypeError(msg)


class Constructor:
    """Calls a class, filling constructor parameters through the resolver."""

    def __init__(self, resolver: ParameterResolver) -> None:
        self._resolver = resolver

    def construct(self, cls: type[T]) -> T:
        if cls.__init__ is object.__init__:  # type: ignore[misc]
            return cls()

        try:
            sig = inspect.signature(cls)
        except (TypeError, ValueError):
            # builtin types without a signature: plain call
            return cls()

        bound = sig.bind_partial()

        self._fill_missing_arguments(cls, sig, bound)

        args, kwargs = self._materialize_call(sig, bound)
        return cls(*args, **kwargs)

    def _fill_missing_arguments(self, cls: type[T], sig: inspect.Signature, bound: inspect.BoundArguments) -> None:
        for name, p in sig.parameters.items():
            if p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD):
                continue

            if name not in bound.arguments:
                value = self._resolver.resolve_param(cls, name, p)
                if value is not inspect.Signature.empty:
                    bound.arguments[name] = value

    def _materialize_call(
        self, sig: inspect.Signature, bound: inspect.BoundArguments
    ) -> tuple[list[Any], dict[str, Any]]:
        args, kwargs = [], {}

        for name, p in sig.parameters.items():
            if name not in bound.arguments:
                continue
            if p.kind is p.POSITIONAL_ONLY:
                args.append(bound.arguments[name])
            elif p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY):
                kwargs[name] = bound.arguments[name]

        return args, kwargs

