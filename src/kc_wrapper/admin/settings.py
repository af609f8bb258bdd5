from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class KCAdminSettings:
    """
    Keycloak admin connection settings.

    Host code decides how to construct this (env, config file, etc.).
    """
    keycloak_base_url: str
    keycloak_admin_user: str
    keycloak_admin_pass: str
    admin_realm: str = "master"
    admin_client_id: str = "admin-cli"
    verify_ssl: bool = True
    timeout: float = 30.0

    # logging
    log_level: str = "INFO"
    log_format: str = "console"

    @property
    def base_url_slash(self) -> str:
        b = self.keycloak_base_url.strip()
        return b if b.endswith("/") else b + "/"

    @property
    def token_url(self) -> str:
        return f"{self.base_url_slash}realms/{self.admin_realm}/protocol/openid-connect/token"

    @property
    def admin_url(self) -> str:
        return f"{self.base_url_slash}admin/realms"
