from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..adapters.keycloak.responses import ensure_created, extract_id
from ..core.logging import get_logger
from ..domain.exceptions import EntityNotFoundError
from ..domain.roles import Roles
from ..domain.validation import require_not_empty, require_not_none
from .realm import Realm
from .user import User

logger = get_logger(__name__)


def openid_connect_with_secret(
    client_id: str,
    secret: str,
    uri: str,
    standard_flow: bool,
    direct_access_grants: bool,
) -> dict[str, Any]:
    """Confidential OIDC client authenticating with a client secret."""
    return {
        "clientId": client_id,
        "protocol": "openid-connect",
        "publicClient": False,
        "redirectUris": [uri],
        "secret": secret,
        "clientAuthenticatorType": "client-secret",
        "standardFlowEnabled": standard_flow,
        "directAccessGrantsEnabled": direct_access_grants,
    }


def openid_connect_with_implicit(client_id: str, uri: str) -> dict[str, Any]:
    """Public OIDC client using the implicit flow only."""
    return {
        "clientId": client_id,
        "protocol": "openid-connect",
        "publicClient": True,
        "redirectUris": [uri],
        "standardFlowEnabled": False,
        "implicitFlowEnabled": True,
        "directAccessGrantsEnabled": False,
    }


def openid_connect_with_client_credentials(client_id: str, secret: str) -> dict[str, Any]:
    """Confidential OIDC client with a service account (client credentials grant)."""
    return {
        "clientId": client_id,
        "protocol": "openid-connect",
        "publicClient": False,
        "secret": secret,
        "clientAuthenticatorType": "client-secret",
        "standardFlowEnabled": False,
        "directAccessGrantsEnabled": False,
        "serviceAccountsEnabled": True,
    }


@dataclass(frozen=True, slots=True)
class Client:
    """
    A client of a realm.

    `id` is the internal Keycloak id used in admin URLs, `client_id` the
    public clientId.
    """
    realm: Realm
    id: str
    client_id: str

    def __post_init__(self) -> None:
        require_not_none(self.realm, "realm")
        require_not_empty(self.id, "id")
        require_not_empty(self.client_id, "client_id")

    async def roles(self) -> Roles:
        """All roles defined by this client."""
        return Roles.from_representations(await self.realm.api.list_client_roles(self.realm.name, self.id))

    async def service_account_user(self) -> User:
        rep = await self.realm.api.get_service_account_user(self.realm.name, self.id)
        return User(self.realm, rep["id"], rep["username"])

    # ------------------------------------------------------------------ #
    # creation
    # ------------------------------------------------------------------ #

    @classmethod
    async def create(cls, realm: Realm, client_id: str, rep: dict[str, Any]) -> "Client":
        require_not_none(realm, "realm")
        require_not_empty(client_id, "client_id")
        require_not_none(rep, "rep")

        response = await realm.api.create_client(realm.name, rep)
        ensure_created(f"client {client_id}", response)
        logger.debug("client_created", realm=realm.name, client=client_id)
        uuid = extract_id(response)
        if not uuid:
            return await cls.find_or_fail(realm, client_id)
        return cls(realm, uuid, client_id)

    @classmethod
    async def create_openid_connect_with_secret(
        cls,
        realm: Realm,
        client_id: str,
        secret: str,
        uri: str,
        standard_flow: bool,
        direct_access_grants: bool,
    ) -> "Client":
        require_not_empty(secret, "secret")
        require_not_empty(uri, "uri")
        rep = openid_connect_with_secret(client_id, secret, uri, standard_flow, direct_access_grants)
        return await cls.create(realm, client_id, rep)

    @classmethod
    async def create_openid_connect_with_implicit(cls, realm: Realm, client_id: str, uri: str) -> "Client":
        require_not_empty(uri, "uri")
        return await cls.create(realm, client_id, openid_connect_with_implicit(client_id, uri))

    @classmethod
    async def create_openid_connect_with_client_credentials(
        cls, realm: Realm, client_id: str, secret: str
    ) -> "Client":
        require_not_empty(secret, "secret")
        rep = openid_connect_with_client_credentials(client_id, secret)
        return await cls.create(realm, client_id, rep)

    # ------------------------------------------------------------------ #
    # lookup
    # ------------------------------------------------------------------ #

    @classmethod
    async def find(cls, realm: Realm, client_id: str) -> Optional["Client"]:
        require_not_none(realm, "realm")
        require_not_empty(client_id, "client_id")

        for rep in await realm.api.list_clients(realm.name, client_id=client_id):
            if rep.get("clientId") == client_id:
                logger.debug("client_found", realm=realm.name, client=client_id)
                return cls(realm, rep["id"], client_id)
        return None

    @classmethod
    async def find_or_fail(cls, realm: Realm, client_id: str) -> "Client":
        client = await cls.find(realm, client_id)
        if client is None:
            raise EntityNotFoundError("Client", client_id)
        return client

    @classmethod
    async def find_or_create(cls, realm: Realm, client_id: str, rep: dict[str, Any]) -> "Client":
        client = await cls.find(realm, client_id)
        if client is None:
            return await cls.create(realm, client_id, rep)
        return client

    @classmethod
    async def find_or_create_openid_connect_with_secret(
        cls,
        realm: Realm,
        client_id: str,
        secret: str,
        uri: str,
        standard_flow: bool,
        direct_access_grants: bool,
    ) -> "Client":
        client = await cls.find(realm, client_id)
        if client is None:
            return await cls.create_openid_connect_with_secret(
                realm, client_id, secret, uri, standard_flow, direct_access_grants
            )
        return client

    @classmethod
    async def find_or_create_openid_connect_with_implicit(
        cls, realm: Realm, client_id: str, uri: str
    ) -> "Client":
        client = await cls.find(realm, client_id)
        if client is None:
            return await cls.create_openid_connect_with_implicit(realm, client_id, uri)
        return client

    @classmethod
    async def find_or_create_openid_connect_with_client_credentials(
        cls, realm: Realm, client_id: str, secret: str
    ) -> "Client":
        client = await cls.find(realm, client_id)
        if client is None:
            return await cls.create_openid_connect_with_client_credentials(realm, client_id, secret)
        return client
