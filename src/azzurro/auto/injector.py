from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from .._injector import Injector


class InjectorService:
    """Service lookup for application code (the `injector` service)."""

    def __init__(self, injector: Injector) -> None:
        self._injector = injector

    def get(self, name: str) -> Any:
        return self._injector.get_service(name)

    def has(self, name: str) -> bool:
        return self._injector.has_service(name)
