from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.logging import get_logger
from ..domain.exceptions import EntityNotFoundError
from ..domain.ports import AdminApi
from ..domain.roles import Roles
from ..domain.validation import require_not_empty, require_not_none

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Realm:
    """
    A realm on the Keycloak server, addressed by name.

    Every other entity helper hangs off a `Realm` and reaches the admin API
    through it.
    """
    api: AdminApi
    name: str

    def __post_init__(self) -> None:
        require_not_none(self.api, "api")
        require_not_empty(self.name, "name")

    async def roles(self) -> Roles:
        """All realm-level roles defined in this realm."""
        return Roles.from_representations(await self.api.list_realm_roles(self.name))

    async def remove(self) -> None:
        await self.api.delete_realm(self.name)
        logger.debug("realm_removed", realm=self.name)

    # ------------------------------------------------------------------ #
    # lookup / creation
    # ------------------------------------------------------------------ #

    @classmethod
    async def create(cls, api: AdminApi, name: str, enabled: bool = True) -> "Realm":
        require_not_empty(name, "name")
        return await cls.create_from_representation(api, {"realm": name, "enabled": enabled})

    @classmethod
    async def create_from_representation(cls, api: AdminApi, rep: dict[str, Any]) -> "Realm":
        require_not_none(rep, "rep")
        name = require_not_empty(rep.get("realm"), "rep.realm")

        logger.debug("realm_create", realm=name)
        await api.create_realm(rep)
        return cls(api, name)

    @classmethod
    async def find(cls, api: AdminApi, name: str) -> Optional["Realm"]:
        require_not_none(api, "api")
        require_not_empty(name, "name")

        for rep in await api.list_realms():
            if rep.get("realm") == name:
                logger.debug("realm_found", realm=name)
                return cls(api, name)
        return None

    @classmethod
    async def find_or_fail(cls, api: AdminApi, name: str) -> "Realm":
        realm = await cls.find(api, name)
        if realm is None:
            raise EntityNotFoundError("Realm", name)
        return realm

    @classmethod
    async def find_or_create(cls, api: AdminApi, name: str, enabled: bool = True) -> "Realm":
        realm = await cls.find(api, name)
        if realm is None:
            return await cls.create(api, name, enabled)
        return realm

    @classmethod
    async def find_or_create_from_representation(cls, api: AdminApi, rep: dict[str, Any]) -> "Realm":
        require_not_none(rep, "rep")
        realm = await cls.find(api, require_not_empty(rep.get("realm"), "rep.realm"))
        if realm is None:
            return await cls.create_from_representation(api, rep)
        return realm
