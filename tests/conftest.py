# tests/conftest.py
import itertools
import logging
from typing import Any, Optional, Sequence

import httpx
import pytest
import structlog

from kc_wrapper.domain.exceptions import AdminApiError


def _created(url: str) -> httpx.Response:
    return httpx.Response(201, headers={"Location": url})


class FakeAdminApi:
    """
    In-memory stand-in for the Keycloak admin API.

    Only implements the behaviour the entity helpers rely on. Every call is
    recorded in `calls` as ``(method_name, args)``.
    """

    base = "http://keycloak.test/admin/realms"

    def __init__(self) -> None:
        self.realms: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, tuple]] = []
        self._ids = itertools.count(1)
        # set to False to simulate a create response without Location header
        self.send_location = True

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def _realm(self, realm: str) -> dict[str, Any]:
        if realm not in self.realms:
            raise AdminApiError(404, "GET", f"{self.base}/{realm}", "Realm not found.")
        return self.realms[realm]

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def calls_to(self, name: str) -> list[tuple]:
        return [args for n, args in self.calls if n == name]

    def _mapping(self, realm: str, subject: str, subject_id: str) -> dict[str, Any]:
        return self._realm(realm)["mappings"].setdefault(
            (subject, subject_id), {"realm": [], "clients": {}}
        )

    def add_realm(self, name: str) -> None:
        self.realms[name] = {
            "rep": {"realm": name, "enabled": True},
            "roles": [],
            "users": [],
            "groups": [],
            "clients": [],
            "client_roles": {},
            "mappings": {},
            "memberships": {},
        }

    def add_realm_role(self, realm: str, name: str, description: Optional[str] = None) -> dict[str, Any]:
        rep = {"id": self._next_id("role"), "name": name, "composite": False, "clientRole": False,
               "containerId": realm}
        if description:
            rep["description"] = description
        self._realm(realm)["roles"].append(rep)
        return rep

    def add_client_role(self, realm: str, client_uuid: str, name: str) -> dict[str, Any]:
        rep = {"id": self._next_id("crole"), "name": name, "composite": False, "clientRole": True,
               "containerId": client_uuid}
        self._realm(realm)["client_roles"].setdefault(client_uuid, []).append(rep)
        return rep

    def _create_response(self, realm: str, kind: str, entity_id: str) -> httpx.Response:
        if self.send_location:
            return _created(f"{self.base}/{realm}/{kind}/{entity_id}")
        return httpx.Response(201)

    # ------------------------------------------------------------------ #
    # realms
    # ------------------------------------------------------------------ #

    async def list_realms(self) -> list[dict[str, Any]]:
        self._record("list_realms")
        return [r["rep"] for r in self.realms.values()]

    async def create_realm(self, rep: dict[str, Any]) -> None:
        self._record("create_realm", rep)
        if rep["realm"] in self.realms:
            raise AdminApiError(409, "POST", self.base, "Conflict detected.")
        self.add_realm(rep["realm"])
        self.realms[rep["realm"]]["rep"] = dict(rep)

    async def delete_realm(self, realm: str) -> None:
        self._record("delete_realm", realm)
        self._realm(realm)
        del self.realms[realm]

    # ------------------------------------------------------------------ #
    # realm roles
    # ------------------------------------------------------------------ #

    async def list_realm_roles(self, realm: str) -> list[dict[str, Any]]:
        self._record("list_realm_roles", realm)
        return [dict(r) for r in self._realm(realm)["roles"]]

    async def create_realm_role(self, realm: str, rep: dict[str, Any]) -> None:
        self._record("create_realm_role", realm, rep)
        if any(r["name"] == rep["name"] for r in self._realm(realm)["roles"]):
            raise AdminApiError(409, "POST", f"{self.base}/{realm}/roles", "Role already exists")
        self.add_realm_role(realm, rep["name"], rep.get("description"))

    # ------------------------------------------------------------------ #
    # users
    # ------------------------------------------------------------------ #

    async def list_users(self, realm: str, username: Optional[str] = None) -> list[dict[str, Any]]:
        self._record("list_users", realm, username)
        users = self._realm(realm)["users"]
        if username:
            users = [u for u in users if u["username"] == username]
        return [dict(u) for u in users]

    async def create_user(self, realm: str, rep: dict[str, Any]) -> httpx.Response:
        self._record("create_user", realm, rep)
        users = self._realm(realm)["users"]
        if any(u["username"] == rep["username"] for u in users):
            return httpx.Response(409)
        user_id = self._next_id("user")
        users.append({"id": user_id, "username": rep["username"], "enabled": rep.get("enabled", True)})
        return self._create_response(realm, "users", user_id)

    async def join_group(self, realm: str, user_id: str, group_id: str) -> None:
        self._record("join_group", realm, user_id, group_id)
        groups = self._realm(realm)["memberships"].setdefault(user_id, [])
        if group_id not in groups:
            groups.append(group_id)

    # ------------------------------------------------------------------ #
    # groups
    # ------------------------------------------------------------------ #

    async def list_groups(self, realm: str) -> list[dict[str, Any]]:
        self._record("list_groups", realm)
        return [dict(g) for g in self._realm(realm)["groups"]]

    async def create_group(self, realm: str, rep: dict[str, Any]) -> httpx.Response:
        self._record("create_group", realm, rep)
        groups = self._realm(realm)["groups"]
        if any(g["name"] == rep["name"] for g in groups):
            return httpx.Response(409)
        group_id = self._next_id("group")
        groups.append({"id": group_id, "name": rep["name"], "path": f"/{rep['name']}"})
        return self._create_response(realm, "groups", group_id)

    # ------------------------------------------------------------------ #
    # clients
    # ------------------------------------------------------------------ #

    async def list_clients(self, realm: str, client_id: Optional[str] = None) -> list[dict[str, Any]]:
        self._record("list_clients", realm, client_id)
        clients = self._realm(realm)["clients"]
        if client_id:
            clients = [c for c in clients if c["clientId"] == client_id]
        return [dict(c) for c in clients]

    async def create_client(self, realm: str, rep: dict[str, Any]) -> httpx.Response:
        self._record("create_client", realm, rep)
        clients = self._realm(realm)["clients"]
        if any(c["clientId"] == rep["clientId"] for c in clients):
            return httpx.Response(409)
        uuid = self._next_id("client")
        clients.append({"id": uuid, **rep})
        if rep.get("serviceAccountsEnabled"):
            self._realm(realm)["users"].append(
                {"id": self._next_id("user"), "username": f"service-account-{rep['clientId']}",
                 "serviceAccountClientId": rep["clientId"]}
            )
        return self._create_response(realm, "clients", uuid)

    async def list_client_roles(self, realm: str, client_uuid: str) -> list[dict[str, Any]]:
        self._record("list_client_roles", realm, client_uuid)
        return [dict(r) for r in self._realm(realm)["client_roles"].get(client_uuid, [])]

    async def get_service_account_user(self, realm: str, client_uuid: str) -> dict[str, Any]:
        self._record("get_service_account_user", realm, client_uuid)
        client = next(c for c in self._realm(realm)["clients"] if c["id"] == client_uuid)
        return next(
            dict(u) for u in self._realm(realm)["users"]
            if u.get("serviceAccountClientId") == client["clientId"]
        )

    # ------------------------------------------------------------------ #
    # role mappings
    # ------------------------------------------------------------------ #

    async def list_realm_role_mappings(self, realm: str, subject: str, subject_id: str) -> list[dict[str, Any]]:
        self._record("list_realm_role_mappings", realm, subject, subject_id)
        return [dict(r) for r in self._mapping(realm, subject, subject_id)["realm"]]

    async def add_realm_role_mappings(
        self, realm: str, subject: str, subject_id: str, roles: Sequence[dict[str, Any]]
    ) -> None:
        self._record("add_realm_role_mappings", realm, subject, subject_id, list(roles))
        self._mapping(realm, subject, subject_id)["realm"].extend(roles)

    async def list_client_role_mappings(
        self, realm: str, subject: str, subject_id: str, client_uuid: str
    ) -> list[dict[str, Any]]:
        self._record("list_client_role_mappings", realm, subject, subject_id, client_uuid)
        clients = self._mapping(realm, subject, subject_id)["clients"]
        return [dict(r) for r in clients.get(client_uuid, [])]

    async def add_client_role_mappings(
        self, realm: str, subject: str, subject_id: str, client_uuid: str, roles: Sequence[dict[str, Any]]
    ) -> None:
        self._record("add_client_role_mappings", realm, subject, subject_id, client_uuid, list(roles))
        clients = self._mapping(realm, subject, subject_id)["clients"]
        clients.setdefault(client_uuid, []).extend(roles)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    package_logger = logging.getLogger("kc_wrapper")
    package_logger.handlers = []
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    logging.getLogger("httpx").setLevel(logging.NOTSET)


@pytest.fixture()
def api() -> FakeAdminApi:
    return FakeAdminApi()


@pytest.fixture()
def demo_api(api: FakeAdminApi) -> FakeAdminApi:
    """A fake with realm ``demo`` holding roles one, two and three."""
    api.add_realm("demo")
    for name in ("one", "two", "three"):
        api.add_realm_role("demo", name, f"Role {name}")
    return api
