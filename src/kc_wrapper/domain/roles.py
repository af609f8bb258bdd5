# src/kc_wrapper/domain/roles.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from .exceptions import InvalidArgumentError, RoleNotFoundError
from .validation import require_names, require_not_empty, require_not_none
from .value_objects import Role


@dataclass(frozen=True, slots=True, repr=False)
class Roles:
    """
    Ordered, read-only collection of roles with name based lookups.

    A `Roles` instance is a snapshot: the input is copied on construction and
    every read hands out copies, so neither side can change the other later.
    Roles of different containers (realm vs. a client) must not be mixed;
    the collection does not record its container.

    Names are expected to be unique (Keycloak enforces it). Duplicates are
    tolerated and the first match wins.
    """

    _roles: Tuple[Role, ...] = ()

    def __init__(self, roles: Iterable[Role] | None = None) -> None:
        snapshot = tuple(roles) if roles is not None else ()
        if any(role is None for role in snapshot):
            raise InvalidArgumentError("None elements are not allowed for roles")
        object.__setattr__(self, "_roles", snapshot)

    @classmethod
    def from_representations(cls, reps: Iterable[Mapping[str, Any]] | None) -> "Roles":
        """Wrap a list of `RoleRepresentation` payloads as returned by the admin API."""
        return cls(Role.from_representation(rep) for rep in (reps or []))

    # ------------------------------------------------------------------ #
    # reading
    # ------------------------------------------------------------------ #

    def as_list(self) -> List[Role]:
        return list(self._roles)

    def as_names(self) -> List[str]:
        return [role.name for role in self._roles]

    def to_representations(self) -> List[dict[str, Any]]:
        return [role.to_representation() for role in self._roles]

    def is_empty(self) -> bool:
        return not self._roles

    # ------------------------------------------------------------------ #
    # lookups
    # ------------------------------------------------------------------ #

    def find_by_name(self, name: str) -> Optional[Role]:
        require_not_empty(name, "name")
        for role in self._roles:
            if role.name == name:
                return role
        return None

    def find_by_name_or_fail(self, name: str) -> Role:
        """
        Raises:
            RoleNotFoundError if no role has the given name. The message
            lists the names currently in the collection.
        """
        role = self.find_by_name(name)
        if role is None:
            raise RoleNotFoundError(name, self.as_names())
        return role

    def find_by_names_or_fail(self, *names: str) -> "Roles":
        """
        Look up several roles at once, in the order the names are given.

        Stops at the first unknown name and raises `RoleNotFoundError` for it;
        nothing found before that point is returned.
        """
        wanted = require_names(names)
        return Roles(self.find_by_name_or_fail(name) for name in wanted)

    def missing_names(self, *names: str) -> List[str]:
        """Return every given name that has no role here, keeping argument order."""
        wanted = require_names(names)
        return [name for name in wanted if self.find_by_name(name) is None]

    # ------------------------------------------------------------------ #
    # reconciliation
    # ------------------------------------------------------------------ #

    def missing(self, expected: "Roles") -> "Roles":
        """
        Return the roles of `expected` whose name does not occur in this set.

        The result follows the order of `expected`. If this set is empty,
        `expected` itself is returned.
        """
        require_not_none(expected, "expected")
        if self.is_empty():
            return expected
        present = set(self.as_names())
        return Roles(role for role in expected if role.name not in present)

    # ------------------------------------------------------------------ #
    # container protocol
    # ------------------------------------------------------------------ #

    def __iter__(self) -> Iterator[Role]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Role):
            item = item.name
        if not isinstance(item, str) or not item:
            return False
        return self.find_by_name(item) is not None

    def __repr__(self) -> str:
        return f"Roles({self.as_names()!r})"
