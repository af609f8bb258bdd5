from __future__ import annotations

import asyncio
import time
import urllib.parse
from typing import Any, Dict, Optional, Sequence

import httpx

from ..core.logging import get_logger
from ..domain.exceptions import AdminApiError, AuthenticationError
from ..domain.ports import MappingSubject, Representation
from .settings import KCAdminSettings

logger = get_logger(__name__)

# refresh the admin token this many seconds before it expires
TOKEN_EXPIRY_MARGIN = 20


def _seg(value: str) -> str:
    return urllib.parse.quote(value, safe="")


class KeycloakAdminClient:
    """
    Minimal async Keycloak Admin wrapper.

    - obtains admin tokens (password grant against the admin realm)
    - retries once on 401
    - exposes realm, role, user, group, client and role-mapping endpoints

    Implements the `AdminApi` port.
    """

    def __init__(self, settings: KCAdminSettings, client: Optional[httpx.AsyncClient] = None):
        self.s = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(verify=self.s.verify_ssl, timeout=self.s.timeout)
        self._token: Optional[str] = None
        self._token_exp: float = 0.0
        self._lock = asyncio.Lock()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "KeycloakAdminClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------ #
    # token management
    # ------------------------------------------------------------------ #

    def _token_valid(self) -> bool:
        return bool(self._token) and time.time() < (self._token_exp - TOKEN_EXPIRY_MARGIN)

    async def _get_token(self, *, force: bool = False) -> str:
        if not force and self._token_valid():
            return self._token

        async with self._lock:
            if not force and self._token_valid():
                return self._token

            data = {
                "client_id": self.s.admin_client_id,
                "username": self.s.keycloak_admin_user,
                "password": self.s.keycloak_admin_pass,
                "grant_type": "password",
            }
            resp = await self._client.post(self.s.token_url, data=data)
            try:
                resp.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise AuthenticationError(
                    f"Failed to obtain admin token: {e.response.status_code} {e.response.text}"
                ) from e

            payload = resp.json()
            self._token = payload["access_token"]
            self._token_exp = time.time() + float(payload.get("expires_in", 60))
            logger.debug("admin_token_obtained", realm=self.s.admin_realm, expires_in=payload.get("expires_in"))
            return self._token

    def _auth_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        raise_for_status: bool = True,
    ) -> httpx.Response:
        token = await self._get_token()
        resp = await self._client.request(
            method,
            url,
            headers=self._auth_headers(token),
            params=params,
            json=json,
        )
        if resp.status_code == 401:
            # refresh once
            token = await self._get_token(force=True)
            resp = await self._client.request(
                method,
                url,
                headers=self._auth_headers(token),
                params=params,
                json=json,
            )
        if raise_for_status and resp.is_error:
            raise AdminApiError(resp.status_code, method, url, resp.text or None)
        return resp

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        resp = await self._request("GET", url, params=params)
        return resp.json() if resp.content else None

    # ------------------------------------------------------------------ #
    # base helpers
    # ------------------------------------------------------------------ #

    def _realm_admin(self, realm: str) -> str:
        return f"{self.s.admin_url}/{_seg(realm)}"

    # ------------------------------------------------------------------ #
    # realms
    # ------------------------------------------------------------------ #

    async def list_realms(self) -> list[Representation]:
        return await self._get_json(self.s.admin_url) or []

    async def get_realm(self, realm: str) -> Representation:
        return await self._get_json(self._realm_admin(realm))

    async def create_realm(self, rep: Representation) -> None:
        await self._request("POST", self.s.admin_url, json=rep)

    async def delete_realm(self, realm: str) -> None:
        await self._request("DELETE", self._realm_admin(realm))

    # ------------------------------------------------------------------ #
    # realm roles
    # ------------------------------------------------------------------ #

    async def list_realm_roles(self, realm: str) -> list[Representation]:
        return await self._get_json(f"{self._realm_admin(realm)}/roles") or []

    async def create_realm_role(self, realm: str, rep: Representation) -> None:
        await self._request("POST", f"{self._realm_admin(realm)}/roles", json=rep)

    # ------------------------------------------------------------------ #
    # users
    # ------------------------------------------------------------------ #

    async def list_users(self, realm: str, username: Optional[str] = None) -> list[Representation]:
        params = {"username": username, "exact": "true"} if username else None
        return await self._get_json(f"{self._realm_admin(realm)}/users", params=params) or []

    async def get_user(self, realm: str, user_id: str) -> Representation:
        return await self._get_json(f"{self._realm_admin(realm)}/users/{_seg(user_id)}")

    async def create_user(self, realm: str, rep: Representation) -> httpx.Response:
        return await self._request(
            "POST", f"{self._realm_admin(realm)}/users", json=rep, raise_for_status=False
        )

    async def join_group(self, realm: str, user_id: str, group_id: str) -> None:
        url = f"{self._realm_admin(realm)}/users/{_seg(user_id)}/groups/{_seg(group_id)}"
        await self._request("PUT", url)

    async def list_user_groups(self, realm: str, user_id: str) -> list[Representation]:
        return await self._get_json(f"{self._realm_admin(realm)}/users/{_seg(user_id)}/groups") or []

    # ------------------------------------------------------------------ #
    # groups
    # ------------------------------------------------------------------ #

    async def list_groups(self, realm: str) -> list[Representation]:
        return await self._get_json(f"{self._realm_admin(realm)}/groups") or []

    async def get_group(self, realm: str, group_id: str) -> Representation:
        return await self._get_json(f"{self._realm_admin(realm)}/groups/{_seg(group_id)}")

    async def create_group(self, realm: str, rep: Representation) -> httpx.Response:
        return await self._request(
            "POST", f"{self._realm_admin(realm)}/groups", json=rep, raise_for_status=False
        )

    # ------------------------------------------------------------------ #
    # clients
    # ------------------------------------------------------------------ #

    async def list_clients(self, realm: str, client_id: Optional[str] = None) -> list[Representation]:
        params = {"clientId": client_id} if client_id else None
        return await self._get_json(f"{self._realm_admin(realm)}/clients", params=params) or []

    async def get_client(self, realm: str, client_uuid: str) -> Representation:
        return await self._get_json(f"{self._realm_admin(realm)}/clients/{_seg(client_uuid)}")

    async def create_client(self, realm: str, rep: Representation) -> httpx.Response:
        return await self._request(
            "POST", f"{self._realm_admin(realm)}/clients", json=rep, raise_for_status=False
        )

    async def list_client_roles(self, realm: str, client_uuid: str) -> list[Representation]:
        url = f"{self._realm_admin(realm)}/clients/{_seg(client_uuid)}/roles"
        return await self._get_json(url) or []

    async def create_client_role(self, realm: str, client_uuid: str, rep: Representation) -> None:
        url = f"{self._realm_admin(realm)}/clients/{_seg(client_uuid)}/roles"
        await self._request("POST", url, json=rep)

    async def get_service_account_user(self, realm: str, client_uuid: str) -> Representation:
        url = f"{self._realm_admin(realm)}/clients/{_seg(client_uuid)}/service-account-user"
        return await self._get_json(url)

    # ------------------------------------------------------------------ #
    # role mappings (subject is "users" or "groups")
    # ------------------------------------------------------------------ #

    def _mappings(self, realm: str, subject: MappingSubject, subject_id: str) -> str:
        if subject not in ("users", "groups"):
            raise ValueError(f"Unsupported role mapping subject: {subject!r}")
        return f"{self._realm_admin(realm)}/{subject}/{_seg(subject_id)}/role-mappings"

    async def list_realm_role_mappings(
        self, realm: str, subject: MappingSubject, subject_id: str
    ) -> list[Representation]:
        url = f"{self._mappings(realm, subject, subject_id)}/realm"
        return await self._get_json(url) or []

    async def add_realm_role_mappings(
        self, realm: str, subject: MappingSubject, subject_id: str, roles: Sequence[Representation]
    ) -> None:
        url = f"{self._mappings(realm, subject, subject_id)}/realm"
        await self._request("POST", url, json=list(roles))

    async def list_client_role_mappings(
        self, realm: str, subject: MappingSubject, subject_id: str, client_uuid: str
    ) -> list[Representation]:
        url = f"{self._mappings(realm, subject, subject_id)}/clients/{_seg(client_uuid)}"
        return await self._get_json(url) or []

    async def add_client_role_mappings(
        self,
        realm: str,
        subject: MappingSubject,
        subject_id: str,
        client_uuid: str,
        roles: Sequence[Representation],
    ) -> None:
        url = f"{self._mappings(realm, subject, subject_id)}/clients/{_seg(client_uuid)}"
        await self._request("POST", url, json=list(roles))
