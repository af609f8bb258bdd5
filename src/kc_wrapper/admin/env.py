from __future__ import annotations

import asyncio
import os
from typing import Any, Iterable, Optional

from ..core.logging import configure_logging
from .helpers import GroupSpec, RoleSpec, UserSpec
from .provision import provision_realm
from .settings import KCAdminSettings


def settings_from_env() -> KCAdminSettings:
    def _bool(key: str, default: bool = True) -> bool:
        raw = os.getenv(key)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _float(key: str, default: float) -> float:
        raw = os.getenv(key)
        if not raw:
            return default
        try:
            return float(raw)
        except ValueError as e:
            raise RuntimeError(f"{key} must be a number, got {raw!r}") from e

    base_url = os.getenv("KEYCLOAK_BASE_URL")
    admin_user = os.getenv("KEYCLOAK_ADMIN_USER")
    admin_pass = os.getenv("KEYCLOAK_ADMIN_PASS")
    if not all([base_url, admin_user, admin_pass]):
        missing = [
            n
            for n, v in [
                ("KEYCLOAK_BASE_URL", base_url),
                ("KEYCLOAK_ADMIN_USER", admin_user),
                ("KEYCLOAK_ADMIN_PASS", admin_pass),
            ]
            if not v
        ]
        raise RuntimeError(f"Missing Keycloak admin settings: {', '.join(missing)}")

    return KCAdminSettings(
        keycloak_base_url=base_url,
        keycloak_admin_user=admin_user,
        keycloak_admin_pass=admin_pass,
        admin_realm=os.getenv("KEYCLOAK_ADMIN_REALM") or "master",
        admin_client_id=os.getenv("KEYCLOAK_ADMIN_CLIENT_ID") or "admin-cli",
        verify_ssl=_bool("VERIFY_SSL", True),
        timeout=_float("KEYCLOAK_TIMEOUT", 30.0),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_format=os.getenv("LOG_FORMAT") or "console",
    )


def provision_realm_from_env(
    realm: str,
    *,
    realm_roles: Optional[Iterable[RoleSpec]] = None,
    groups: Optional[Iterable[GroupSpec]] = None,
    users: Optional[Iterable[UserSpec]] = None,
) -> dict[str, Any]:
    """Convenience sync wrapper using env-configured settings."""
    settings = settings_from_env()
    configure_logging(settings.log_level, settings.log_format)
    return asyncio.run(
        provision_realm(
            settings=settings,
            realm=realm,
            realm_roles=realm_roles,
            groups=groups,
            users=users,
        )
    )
