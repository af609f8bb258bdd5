from __future__ import annotations

from typing import Any, Iterable, Tuple, TypeVar

from .exceptions import InvalidArgumentError

T = TypeVar("T")


def require_not_none(value: T | None, label: str) -> T:
    if value is None:
        raise InvalidArgumentError(f"{label}==None")
    return value


def require_not_empty(value: Any, label: str) -> Any:
    """
    Reject None and empty values (strings, sequences, mappings).
    """
    if value is None or len(value) == 0:
        raise InvalidArgumentError(f"{label}==None or empty")
    return value


def require_names(names: Iterable[str] | None, label: str = "names") -> Tuple[str, ...]:
    """
    Normalize a collection of names into a tuple and validate it.

    The collection itself must be non-empty and no element may be None or
    an empty string. A plain string is treated as a single name.
    """
    if isinstance(names, str):
        names = (names,)
    values = tuple(names) if names is not None else ()
    require_not_empty(values, label)
    for value in values:
        if value is None:
            raise InvalidArgumentError(f"None elements are not allowed for {label}")
        if not isinstance(value, str) or not value:
            raise InvalidArgumentError(f"Empty elements are not allowed for {label}")
    return values
