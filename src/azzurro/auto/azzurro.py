from __future__ import annotations


ROUTE_EVENT = "AF:route"
CALLBACK_EVENT = "AF:callback"


class AzzurroService:
    """Names of the events fired by `bootstrap()` between start and end."""

    def __init__(self, route_event: str = ROUTE_EVENT, callback_event: str = CALLBACK_EVENT) -> None:
        self._route_event = route_event
        self._callback_event = callback_event

    def get_route_event(self) -> str:
        return self._route_event

    def get_callback_event(self) -> str:
        return self._callback_event


class AzzurroServiceProvider:
    def register(self) -> AzzurroService:
        return AzzurroService()
