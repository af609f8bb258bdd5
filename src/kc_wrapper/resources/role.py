from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.logging import get_logger
from ..domain.exceptions import EntityNotFoundError
from ..domain.validation import require_not_empty, require_not_none
from ..domain.value_objects import Role
from .realm import Realm

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RealmRole:
    """A persisted realm-level role."""
    realm: Realm
    id: str
    name: str
    description: Optional[str] = None

    def __post_init__(self) -> None:
        require_not_none(self.realm, "realm")
        require_not_empty(self.id, "id")
        require_not_empty(self.name, "name")

    def as_role(self) -> Role:
        return Role(name=self.name, description=self.description, id=self.id)

    @classmethod
    async def create(cls, realm: Realm, name: str, description: Optional[str] = None) -> "RealmRole":
        """
        Create the role and read it back.

        Keycloak does not return the id of a new role, so the realm roles are
        listed again and the new one is located by name.
        """
        require_not_none(realm, "realm")
        require_not_empty(name, "name")

        rep = {"name": name}
        if description:
            rep["description"] = description
        await realm.api.create_realm_role(realm.name, rep)
        logger.debug("role_created", realm=realm.name, role=name)

        role = (await realm.roles()).find_by_name_or_fail(name)
        return cls(realm, role.id, name, role.description)

    @classmethod
    async def find(cls, realm: Realm, name: str) -> Optional["RealmRole"]:
        require_not_none(realm, "realm")
        require_not_empty(name, "name")

        role = (await realm.roles()).find_by_name(name)
        if role is None:
            return None
        logger.debug("role_found", realm=realm.name, role=name)
        return cls(realm, role.id, name, role.description)

    @classmethod
    async def find_or_fail(cls, realm: Realm, name: str) -> "RealmRole":
        role = await cls.find(realm, name)
        if role is None:
            raise EntityNotFoundError("Role", name)
        return role

    @classmethod
    async def find_or_create(
        cls, realm: Realm, name: str, description: Optional[str] = None
    ) -> "RealmRole":
        role = await cls.find(realm, name)
        if role is None:
            return await cls.create(realm, name, description)
        return role
