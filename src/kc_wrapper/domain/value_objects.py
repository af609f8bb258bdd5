# src/kc_wrapper/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .validation import require_not_empty


@dataclass(frozen=True, slots=True)
class Role:
    """
    One named permission grant as exposed by Keycloak.

    The name is unique within its container (a realm or a client). `id` is
    assigned by Keycloak and stays None until the role has been persisted.
    """
    name: str
    description: Optional[str] = None
    id: Optional[str] = None
    composite: bool = False
    client_role: bool = False
    container_id: Optional[str] = None

    def __post_init__(self) -> None:
        require_not_empty(self.name, "name")

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_representation(cls, rep: Mapping[str, Any]) -> "Role":
        """Build a role from a Keycloak `RoleRepresentation` payload."""
        return cls(
            name=rep.get("name"),
            description=rep.get("description"),
            id=rep.get("id"),
            composite=bool(rep.get("composite", False)),
            client_role=bool(rep.get("clientRole", False)),
            container_id=rep.get("containerId"),
        )

    def to_representation(self) -> dict[str, Any]:
        rep: dict[str, Any] = {
            "name": self.name,
            "composite": self.composite,
            "clientRole": self.client_role,
        }
        if self.id:
            rep["id"] = self.id
        if self.description is not None:
            rep["description"] = self.description
        if self.container_id:
            rep["containerId"] = self.container_id
        return rep
