from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from ..domain.ports import AdminApi
from ..resources.group import Group
from ..resources.realm import Realm
from ..resources.role import RealmRole
from ..resources.user import User


@dataclass(frozen=True, slots=True)
class RoleSpec:
    name: str
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class GroupSpec:
    name: str
    realm_roles: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class UserSpec:
    name: str
    password: str
    groups: Tuple[str, ...] = ()
    realm_roles: Tuple[str, ...] = ()
    enabled: bool = True


async def _ensure_realm(api: AdminApi, *, name: str) -> tuple[Realm, bool]:
    realm = await Realm.find(api, name)
    if realm is not None:
        return realm, False
    return await Realm.create(api, name), True


async def _ensure_roles(realm: Realm, *, roles: Iterable[RoleSpec]) -> dict[str, list[str]]:
    current = await realm.roles()
    created: list[str] = []
    existing: list[str] = []
    for spec in roles:
        if spec.name in current:
            existing.append(spec.name)
            continue
        await RealmRole.create(realm, spec.name, spec.description)
        created.append(spec.name)
    return {"created": created, "existing": existing}


async def _ensure_groups(realm: Realm, *, groups: Iterable[GroupSpec]) -> list[dict[str, Any]]:
    actions: list[dict[str, Any]] = []
    for spec in groups:
        group = await Group.find(realm, spec.name)
        created = group is None
        if group is None:
            group = await Group.create(realm, spec.name)

        granted: list[str] = []
        if spec.realm_roles:
            granted = (await group.add_realm_roles_by_name(*spec.realm_roles)).as_names()

        actions.append({"group": spec.name, "created": created, "granted_realm_roles": granted})
    return actions


async def _ensure_users(realm: Realm, *, users: Iterable[UserSpec]) -> list[dict[str, Any]]:
    actions: list[dict[str, Any]] = []
    for spec in users:
        user = await User.find(realm, spec.name)
        created = user is None
        if user is None:
            user = await User.create(realm, spec.name, spec.password, spec.enabled)

        if spec.groups:
            await user.join_group_list([await Group.find_or_fail(realm, g) for g in spec.groups])

        granted: list[str] = []
        if spec.realm_roles:
            granted = (await user.add_realm_roles_by_name(*spec.realm_roles)).as_names()

        actions.append(
            {
                "user": spec.name,
                "created": created,
                "groups": list(spec.groups),
                "granted_realm_roles": granted,
            }
        )
    return actions
