"""Services of the built-in `auto` module.

- `event`: `EventService`, synchronous listener fan-out.
- `azzurro`: `AzzurroService` (built by `AzzurroServiceProvider`), lifecycle event names.
- `controller` / `filter`: `ControllerService` / `FilterService`, named component lookup.
- `injector`: `InjectorService`, service lookup for application code.
"""

from .azzurro import AzzurroService, AzzurroServiceProvider
from .controller import ControllerService
from .event import EventService
from .filter import FilterService
from .injector import InjectorService


__all__ = [
    "AzzurroService",
    "AzzurroServiceProvider",
    "ControllerService",
    "EventService",
    "FilterService",
    "InjectorService",
]
