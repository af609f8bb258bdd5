# src/kc_wrapper/admin/cli.py

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Sequence

from ..core.logging import configure_logging
from .env import settings_from_env
from .helpers import GroupSpec, RoleSpec, UserSpec
from .provision import provision_realm


def _csv(raw: str) -> tuple[str, ...]:
    return tuple(x.strip() for x in raw.split(",") if x and x.strip())


def parse_role(raw: str) -> RoleSpec:
    """NAME[:DESCRIPTION]"""
    name, _, description = raw.partition(":")
    if not name.strip():
        raise argparse.ArgumentTypeError(f"invalid role {raw!r}: name is empty")
    return RoleSpec(name=name.strip(), description=description.strip() or None)


def parse_group(raw: str) -> GroupSpec:
    """NAME[:ROLE,ROLE]"""
    name, _, roles = raw.partition(":")
    if not name.strip():
        raise argparse.ArgumentTypeError(f"invalid group {raw!r}: name is empty")
    return GroupSpec(name=name.strip(), realm_roles=_csv(roles))


def parse_user(raw: str) -> UserSpec:
    """NAME:PASSWORD[:GROUP,GROUP[:ROLE,ROLE]]"""
    parts = raw.split(":", 3)
    if len(parts) < 2 or not parts[0].strip() or not parts[1]:
        raise argparse.ArgumentTypeError(f"invalid user {raw!r}: expected NAME:PASSWORD[:GROUPS[:ROLES]]")
    groups = _csv(parts[2]) if len(parts) > 2 else ()
    roles = _csv(parts[3]) if len(parts) > 3 else ()
    return UserSpec(name=parts[0].strip(), password=parts[1], groups=groups, realm_roles=roles)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kc-wrapper",
        description="Provision a Keycloak realm with roles, groups and users",
    )

    parser.add_argument("--realm", "-r", required=True, help="Realm to find or create.")
    parser.add_argument(
        "--role",
        dest="roles",
        action="append",
        type=parse_role,
        default=[],
        metavar="NAME[:DESCRIPTION]",
        help="Realm role to ensure (repeatable).",
    )
    parser.add_argument(
        "--group",
        dest="groups",
        action="append",
        type=parse_group,
        default=[],
        metavar="NAME[:ROLE,ROLE]",
        help="Group to ensure, with the realm roles it must hold (repeatable).",
    )
    parser.add_argument(
        "--user",
        dest="users",
        action="append",
        type=parse_user,
        default=[],
        metavar="NAME:PASSWORD[:GROUP,GROUP[:ROLE,ROLE]]",
        help="User to ensure, with groups to join and realm roles to hold (repeatable).",
    )
    parser.add_argument(
        "--log-level",
        help="Override LOG_LEVEL (default INFO).",
    )
    parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        help="Override LOG_FORMAT (default console).",
    )

    return parser.parse_args(args=argv)


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    settings = settings_from_env()
    configure_logging(args.log_level or settings.log_level, args.log_format or settings.log_format)
    return await provision_realm(
        settings=settings,
        realm=args.realm,
        realm_roles=args.roles,
        groups=args.groups,
        users=args.users,
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)

    try:
        summary = asyncio.run(_run(args))
        json.dump({"ok": True, **summary}, sys.stdout, indent=2)
        sys.stdout.write("\n")
    except Exception as exc:  # noqa: BLE001
        json.dump({"ok": False, "error": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        raise


if __name__ == "__main__":
    main()
