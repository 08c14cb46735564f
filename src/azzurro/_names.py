from __future__ import annotations

import re

from ._errors import InvalidNameError


# Letters, underscore and any non-ASCII code point; digits after the first character.
IDENTIFIER = re.compile(r"[A-Za-z_\x7f-\U0010ffff][A-Za-z0-9_\x7f-\U0010ffff]*")


def is_identifier(name: object) -> bool:
    return isinstance(name, str) and IDENTIFIER.fullmatch(name) is not None


def validate_name(name: object, what: str = "module") -> str:
    if not is_identifier(name):
        msg = f"{name!r} is not a valid {what} name!"
        raise InvalidNameError(msg)
    return name  # type: ignore[return-value]


def validate_dependencies(dependencies: object) -> tuple[str, ...]:
    if isinstance(dependencies, (str, bytes)) or not isinstance(dependencies, (list, tuple)):
        msg = f"dependencies must be a list of module names, got {type(dependencies).__name__}"
        raise InvalidNameError(msg)

    for dependency in dependencies:
        if not is_identifier(dependency):
            msg = f"dependencies must be a valid list of module names ({dependency!r} is not)!"
            raise InvalidNameError(msg)

    return tuple(dependencies)
