from __future__ import annotations

from typing import Any, Literal, Optional, Protocol, Sequence

import httpx

Representation = dict[str, Any]
MappingSubject = Literal["users", "groups"]


class AdminApi(Protocol):
    """
    Port for the Keycloak admin REST API as used by the entity helpers.

    `KeycloakAdminClient` is the production implementation. Listing calls
    return plain representations; create calls for users, groups and
    clients return the raw response so that the caller can check for
    `201 Created` and read the `Location` header.
    """

    # realms
    async def list_realms(self) -> list[Representation]: ...

    async def create_realm(self, rep: Representation) -> None: ...

    async def delete_realm(self, realm: str) -> None: ...

    # realm roles
    async def list_realm_roles(self, realm: str) -> list[Representation]: ...

    async def create_realm_role(self, realm: str, rep: Representation) -> None: ...

    # users
    async def list_users(self, realm: str, username: Optional[str] = None) -> list[Representation]: ...

    async def create_user(self, realm: str, rep: Representation) -> httpx.Response: ...

    async def join_group(self, realm: str, user_id: str, group_id: str) -> None: ...

    # groups
    async def list_groups(self, realm: str) -> list[Representation]: ...

    async def create_group(self, realm: str, rep: Representation) -> httpx.Response: ...

    # clients
    async def list_clients(self, realm: str, client_id: Optional[str] = None) -> list[Representation]: ...

    async def create_client(self, realm: str, rep: Representation) -> httpx.Response: ...

    async def list_client_roles(self, realm: str, client_uuid: str) -> list[Representation]: ...

    async def get_service_account_user(self, realm: str, client_uuid: str) -> Representation: ...

    # role mappings
    async def list_realm_role_mappings(
        self, realm: str, subject: MappingSubject, subject_id: str
    ) -> list[Representation]: ...

    async def add_realm_role_mappings(
        self, realm: str, subject: MappingSubject, subject_id: str, roles: Sequence[Representation]
    ) -> None: ...

    async def list_client_role_mappings(
        self, realm: str, subject: MappingSubject, subject_id: str, client_uuid: str
    ) -> list[Representation]: ...

    async def add_client_role_mappings(
        self,
        realm: str,
        subject: MappingSubject,
        subject_id: str,
        client_uuid: str,
        roles: Sequence[Representation],
    ) -> None: ...
