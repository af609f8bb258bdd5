from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from ..adapters.keycloak.responses import ensure_created, extract_id
from ..core.logging import get_logger
from ..domain.exceptions import EntityNotFoundError
from ..domain.ports import MappingSubject
from ..domain.validation import require_not_empty, require_not_none
from ._role_mappings import RoleMappingsMixin
from .realm import Realm

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Group(RoleMappingsMixin):
    """A top-level group of a realm."""
    realm: Realm
    id: str
    name: str

    _subject: ClassVar[MappingSubject] = "groups"

    def __post_init__(self) -> None:
        require_not_none(self.realm, "realm")
        require_not_empty(self.id, "id")
        require_not_empty(self.name, "name")

    @classmethod
    async def create(cls, realm: Realm, name: str) -> "Group":
        require_not_none(realm, "realm")
        require_not_empty(name, "name")

        logger.debug("group_create", realm=realm.name, group=name)
        response = await realm.api.create_group(realm.name, {"name": name})
        ensure_created(f"group {name}", response)
        group_id = extract_id(response)
        if not group_id:
            return await cls.find_or_fail(realm, name)
        return cls(realm, group_id, name)

    @classmethod
    async def find(cls, realm: Realm, name: str) -> Optional["Group"]:
        require_not_none(realm, "realm")
        require_not_empty(name, "name")

        for rep in await realm.api.list_groups(realm.name):
            if rep.get("name") == name:
                logger.debug("group_found", realm=realm.name, group=name)
                return cls(realm, rep["id"], name)
        return None

    @classmethod
    async def find_or_fail(cls, realm: Realm, name: str) -> "Group":
        group = await cls.find(realm, name)
        if group is None:
            raise EntityNotFoundError("Group", name)
        return group

    @classmethod
    async def find_or_create(cls, realm: Realm, name: str) -> "Group":
        group = await cls.find(realm, name)
        if group is None:
            return await cls.create(realm, name)
        return group
