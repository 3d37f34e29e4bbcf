import json
from unittest.mock import Mock

import pytest
import requests

from bookshelf_client import BookshelfClient, CredentialStore


def make_response(status_code=200, payload=None, body=None):
    """Build a real ``requests.Response`` carrying a canned body."""
    r = requests.Response()
    r.status_code = status_code
    if body is None:
        body = json.dumps(payload if payload is not None else {})
    r._content = body.encode("utf-8")
    r.encoding = "utf-8"
    r.headers["Content-Type"] = "application/json"
    return r


@pytest.fixture
def store(tmp_path):
    return CredentialStore(tmp_path / "creds" / "credentials.json")


@pytest.fixture
def logged_in_store(store):
    store.save("api_key", "k1")
    store.save("user_id", "7")
    return store


@pytest.fixture
def transport():
    return Mock()


@pytest.fixture
def client(store, transport):
    return BookshelfClient("http://bookshelf.test", store=store, session=transport)
