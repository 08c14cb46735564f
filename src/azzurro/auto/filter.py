from __future__ import annotations

from ._components import ComponentRegistry


class FilterService(ComponentRegistry):
    kind = "filter"
