from __future__ import annotations

from typing import Any, Iterable, Optional

from ..core.logging import get_logger
from ..domain.ports import AdminApi
from .client import KeycloakAdminClient
from .helpers import GroupSpec, RoleSpec, UserSpec, _ensure_groups, _ensure_realm, _ensure_roles, _ensure_users
from .settings import KCAdminSettings

logger = get_logger(__name__)


async def provision_realm(
        *,
        settings: KCAdminSettings,
        realm: str,
        realm_roles: Optional[Iterable[RoleSpec]] = None,
        groups: Optional[Iterable[GroupSpec]] = None,
        users: Optional[Iterable[UserSpec]] = None,
        api: Optional[AdminApi] = None,
) -> dict[str, Any]:
    """
    High-level async helper to provision a realm.

    Steps:
      1) Ensure the realm exists.
      2) Ensure the realm roles exist.
      3) Ensure the groups exist and hold their realm roles.
      4) Ensure the users exist, are members of their groups and hold their
         realm roles.

    Every step is idempotent: roles are only granted when missing. An unknown
    role or group name aborts the run with a `NotFoundError`.

    Returns a summary dictionary with:
      - realm
      - realm_created
      - roles
      - groups
      - users
    """
    kc = api or KeycloakAdminClient(settings=settings)
    try:
        # 1) Ensure realm
        realm_obj, realm_created = await _ensure_realm(kc, name=realm)

        # 2) Ensure roles
        roles_summary = await _ensure_roles(realm_obj, roles=list(realm_roles or []))

        # 3) Ensure groups
        group_actions = await _ensure_groups(realm_obj, groups=list(groups or []))

        # 4) Ensure users
        user_actions = await _ensure_users(realm_obj, users=list(users or []))

        logger.info(
            "realm_provisioned",
            realm=realm,
            realm_created=realm_created,
            roles_created=len(roles_summary["created"]),
            groups=len(group_actions),
            users=len(user_actions),
        )
        return {
            "realm": realm,
            "realm_created": realm_created,
            "roles": roles_summary,
            "groups": group_actions,
            "users": user_actions,
        }
    finally:
        if api is None:
            await kc.close()
