from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from ..core.logging import get_logger
from ..domain.ports import MappingSubject
from ..domain.roles import Roles
from ..domain.validation import require_names, require_not_none

if TYPE_CHECKING:
    from .client import Client
    from .realm import Realm

logger = get_logger(__name__)


class RoleMappingsMixin:
    """
    Realm and client role grants for entities that carry role mappings
    (users and groups).

    Concrete classes provide `realm`, `id`, `name` and the `_subject` path
    segment of the admin API.
    """

    __slots__ = ()

    _subject: ClassVar[MappingSubject]

    realm: "Realm"
    id: str
    name: str

    # ------------------------------------------------------------------ #
    # realm level
    # ------------------------------------------------------------------ #

    async def realm_roles(self) -> Roles:
        """Realm roles mapped directly to this entity."""
        reps = await self.realm.api.list_realm_role_mappings(self.realm.name, self._subject, self.id)
        return Roles.from_representations(reps)

    async def add_realm_roles(self, roles: Roles) -> None:
        require_not_none(roles, "roles")
        await self.realm.api.add_realm_role_mappings(
            self.realm.name, self._subject, self.id, roles.to_representations()
        )

    async def add_realm_roles_by_name(self, *role_names: str) -> Roles:
        """
        Grant the named realm roles that are not granted yet.

        All names must exist in the realm; otherwise `RoleNotFoundError` is
        raised and nothing is granted. Returns the roles actually added.
        """
        names = require_names(role_names, "role_names")

        current = await self.realm_roles()
        expected = (await self.realm.roles()).find_by_names_or_fail(*names)
        missing = current.missing(expected)
        if not missing.is_empty():
            await self.add_realm_roles(missing)
            logger.debug(
                "realm_roles_granted",
                realm=self.realm.name,
                subject=self._subject,
                name=self.name,
                roles=missing.as_names(),
            )
        return missing

    # ------------------------------------------------------------------ #
    # client level
    # ------------------------------------------------------------------ #

    async def client_roles(self, client: "Client") -> Roles:
        """Roles of `client` mapped directly to this entity."""
        require_not_none(client, "client")
        reps = await self.realm.api.list_client_role_mappings(
            self.realm.name, self._subject, self.id, client.id
        )
        return Roles.from_representations(reps)

    async def add_client_roles(self, client: "Client", roles: Roles) -> None:
        require_not_none(client, "client")
        require_not_none(roles, "roles")
        await self.realm.api.add_client_role_mappings(
            self.realm.name, self._subject, self.id, client.id, roles.to_representations()
        )

    async def add_client_roles_by_name(self, client: "Client", *role_names: str) -> Roles:
        """Same as `add_realm_roles_by_name` for roles defined by `client`."""
        require_not_none(client, "client")
        names = require_names(role_names, "role_names")

        current = await self.client_roles(client)
        expected = (await client.roles()).find_by_names_or_fail(*names)
        missing = current.missing(expected)
        if not missing.is_empty():
            await self.add_client_roles(client, missing)
            logger.debug(
                "client_roles_granted",
                realm=self.realm.name,
                subject=self._subject,
                name=self.name,
                client=client.client_id,
                roles=missing.as_names(),
            )
        return missing
