"""
kc_wrapper.resources

Async find / create / find-or-create helpers for Keycloak entities:

- Realm: realm lookup and creation, realm role listing.
- RealmRole: realm-level role lookup and creation.
- User / Group: lookup, creation, group membership and role grants that
  only add what is missing.
- Client: lookup and creation of OIDC clients, client role listing.
"""

from __future__ import annotations

from .client import (
    Client,
    openid_connect_with_client_credentials,
    openid_connect_with_implicit,
    openid_connect_with_secret,
)
from .group import Group
from .realm import Realm
from .role import RealmRole
from .user import User

__all__ = [
    "Realm",
    "RealmRole",
    "User",
    "Group",
    "Client",
    "openid_connect_with_secret",
    "openid_connect_with_implicit",
    "openid_connect_with_client_credentials",
]
