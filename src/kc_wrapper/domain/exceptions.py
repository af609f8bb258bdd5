from __future__ import annotations

from typing import Iterable, Optional


class KeycloakWrapperError(Exception):
    """Base class for all errors raised by kc_wrapper."""
    pass


class InvalidArgumentError(KeycloakWrapperError, ValueError):
    """Raised when a required argument is None, empty or has an empty element."""
    pass


class NotFoundError(KeycloakWrapperError, LookupError):
    """Raised when a lookup has no match."""
    pass


class RoleNotFoundError(NotFoundError):
    """Raised when a role name is not part of a role set."""

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(f"Role '{name}' not found: [{', '.join(self.available)}]")


class EntityNotFoundError(NotFoundError):
    """Raised by the ``find_or_fail`` helpers."""

    def __init__(self, entity_type: str, identifier: str) -> None:
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(f"{entity_type} '{identifier}' should exist, but was not found")


class CreationFailedError(KeycloakWrapperError):
    """Raised when a create call did not answer with 201 Created."""

    def __init__(self, type_and_name: str, status_code: int, reason: str) -> None:
        self.type_and_name = type_and_name
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Creating {type_and_name} failed with: #{status_code} / {reason}")


class AdminApiError(KeycloakWrapperError):
    """Raised on an unexpected HTTP status from the admin API."""

    def __init__(
        self,
        status_code: int,
        method: str,
        url: str,
        detail: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.method = method
        self.url = url
        self.detail = detail
        msg = f"{method} {url} failed with status {status_code}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class AuthenticationError(KeycloakWrapperError):
    """Raised when no admin token could be obtained."""
    pass
