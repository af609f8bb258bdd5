"""
kc_wrapper.admin

Async Keycloak admin utilities:

- KCAdminSettings: configuration for the Keycloak admin connection.
- KeycloakAdminClient: minimal async admin client (httpx-based).
- provision_realm: high-level async helper to:
    * ensure a realm exists
    * ensure its realm roles exist
    * ensure groups and users exist and hold their realm roles
- settings_from_env / provision_realm_from_env:
    convenience wrappers for env-driven CLI / initContainers.
"""

from __future__ import annotations

from .client import KeycloakAdminClient
from .env import provision_realm_from_env, settings_from_env
from .helpers import GroupSpec, RoleSpec, UserSpec
from .provision import provision_realm
from .settings import KCAdminSettings

__all__ = [
    "KCAdminSettings",
    "KeycloakAdminClient",
    "RoleSpec",
    "GroupSpec",
    "UserSpec",
    "settings_from_env",
    "provision_realm",
    "provision_realm_from_env",
]
