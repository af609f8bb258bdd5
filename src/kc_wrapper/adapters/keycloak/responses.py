"""
Checks applied to the raw responses of create calls.

Keycloak answers a successful create with `201 Created` and the URL of the
new resource in the `Location` header; the body is empty.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

import httpx

from ...domain.exceptions import CreationFailedError
from ...domain.validation import require_not_empty, require_not_none


def ensure_created(type_and_name: str, response: httpx.Response) -> None:
    """
    Raises:
        CreationFailedError unless the response status is 201.
    """
    require_not_empty(type_and_name, "type_and_name")
    require_not_none(response, "response")

    if response.status_code != httpx.codes.CREATED:
        raise CreationFailedError(type_and_name, response.status_code, response.reason_phrase)


def extract_id(response: httpx.Response) -> Optional[str]:
    """Return the last path segment of the `Location` header, if any."""
    require_not_none(response, "response")

    location = response.headers.get("Location")
    if not location:
        return None
    path = urlsplit(location).path
    return path[path.rfind("/") + 1:]
