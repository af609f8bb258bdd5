from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Iterable, Optional

from ..adapters.keycloak.responses import ensure_created, extract_id
from ..core.logging import get_logger
from ..domain.exceptions import EntityNotFoundError, InvalidArgumentError
from ..domain.ports import MappingSubject
from ..domain.validation import require_not_empty, require_not_none
from ._role_mappings import RoleMappingsMixin
from .realm import Realm

if TYPE_CHECKING:
    from .group import Group

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class User(RoleMappingsMixin):
    """A user of a realm, identified by its Keycloak id and username."""
    realm: Realm
    id: str
    name: str

    _subject: ClassVar[MappingSubject] = "users"

    def __post_init__(self) -> None:
        require_not_none(self.realm, "realm")
        require_not_empty(self.id, "id")
        require_not_empty(self.name, "name")

    async def join_groups(self, *groups: "Group") -> None:
        await self.join_group_list(groups)

    async def join_group_list(self, groups: Iterable["Group"]) -> None:
        groups = tuple(require_not_none(groups, "groups"))
        require_not_empty(groups, "groups")
        if any(group is None for group in groups):
            raise InvalidArgumentError("None elements are not allowed for groups")

        for group in groups:
            logger.debug("user_joined_group", realm=self.realm.name, user=self.name, group=group.name)
            await self.realm.api.join_group(self.realm.name, self.id, group.id)

    # ------------------------------------------------------------------ #
    # lookup / creation
    # ------------------------------------------------------------------ #

    @classmethod
    async def create(cls, realm: Realm, name: str, password: str, enabled: bool = True) -> "User":
        """Create a user with a non-temporary password credential."""
        require_not_none(realm, "realm")
        require_not_empty(name, "name")
        require_not_empty(password, "password")

        logger.debug("user_create", realm=realm.name, user=name)
        rep = {
            "username": name,
            "enabled": enabled,
            "credentials": [{"type": "password", "value": password, "temporary": False}],
        }
        response = await realm.api.create_user(realm.name, rep)
        ensure_created(f"user {name}", response)
        user_id = extract_id(response)
        if not user_id:
            return await cls.find_or_fail(realm, name)
        return cls(realm, user_id, name)

    @classmethod
    async def find(cls, realm: Realm, name: str) -> Optional["User"]:
        require_not_none(realm, "realm")
        require_not_empty(name, "name")

        for rep in await realm.api.list_users(realm.name, username=name):
            if rep.get("username") == name:
                logger.debug("user_found", realm=realm.name, user=name)
                return cls(realm, rep["id"], name)
        return None

    @classmethod
    async def find_or_fail(cls, realm: Realm, name: str) -> "User":
        user = await cls.find(realm, name)
        if user is None:
            raise EntityNotFoundError("User", name)
        return user

    @classmethod
    async def find_or_create(
        cls, realm: Realm, name: str, password: str, enabled: bool = True
    ) -> "User":
        user = await cls.find(realm, name)
        if user is None:
            return await cls.create(realm, name, password, enabled)
        return user
