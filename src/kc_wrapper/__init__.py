"""
kc_wrapper

Convenience layer over the Keycloak admin REST API: find / create /
find-or-create helpers for realms, users, groups, clients and roles, built
around `Roles`, an ordered role set with name lookups and reconciliation.
"""

__version__ = "0.1.0"

from .domain.exceptions import (
    KeycloakWrapperError,
    InvalidArgumentError,
    NotFoundError,
    RoleNotFoundError,
    EntityNotFoundError,
    CreationFailedError,
    AdminApiError,
    AuthenticationError,
)
from .domain.value_objects import Role
from .domain.roles import Roles
from .domain.ports import AdminApi

from .adapters.keycloak.responses import ensure_created, extract_id

from .resources import Realm, RealmRole, User, Group, Client

from .admin import KCAdminSettings, KeycloakAdminClient, provision_realm

__all__ = [
    "__version__",
    # role set
    "Role",
    "Roles",
    "AdminApi",
    # exceptions
    "KeycloakWrapperError",
    "InvalidArgumentError",
    "NotFoundError",
    "RoleNotFoundError",
    "EntityNotFoundError",
    "CreationFailedError",
    "AdminApiError",
    "AuthenticationError",
    # response checks
    "ensure_created",
    "extract_id",
    # entity helpers
    "Realm",
    "RealmRole",
    "User",
    "Group",
    "Client",
    # admin
    "KCAdminSettings",
    "KeycloakAdminClient",
    "provision_realm",
]
