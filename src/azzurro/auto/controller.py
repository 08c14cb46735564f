from __future__ import annotations

from ._components import ComponentRegistry


class ControllerService(ComponentRegistry):
    kind = "controller"
