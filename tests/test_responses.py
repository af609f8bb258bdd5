# tests/test_responses.py
import httpx
import pytest

from kc_wrapper.adapters.keycloak.responses import ensure_created, extract_id
from kc_wrapper.domain.exceptions import CreationFailedError, InvalidArgumentError


def test_ensure_created_accepts_201():
    ensure_created("user alice", httpx.Response(201))


@pytest.mark.parametrize(
    "status, reason",
    [(200, "OK"), (409, "Conflict"), (500, "Internal Server Error")],
)
def test_ensure_created_rejects_other_status(status, reason):
    with pytest.raises(CreationFailedError) as exc_info:
        ensure_created("group admins", httpx.Response(status))
    assert str(exc_info.value) == f"Creating group admins failed with: #{status} / {reason}"


def test_ensure_created_validates_arguments():
    with pytest.raises(InvalidArgumentError):
        ensure_created("", httpx.Response(201))
    with pytest.raises(InvalidArgumentError):
        ensure_created("user alice", None)


def test_extract_id():
    response = httpx.Response(
        201,
        headers={"Location": "http://kc.test/admin/realms/demo/users/0f6c2a9e-1b2c"},
    )
    assert extract_id(response) == "0f6c2a9e-1b2c"


def test_extract_id_ignores_query_string():
    response = httpx.Response(201, headers={"Location": "http://kc.test/admin/realms/demo/groups/g-1?x=1"})
    assert extract_id(response) == "g-1"


def test_extract_id_without_location():
    assert extract_id(httpx.Response(201)) is None
