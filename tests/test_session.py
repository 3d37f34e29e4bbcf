"""Tests for SessionController."""

from bookshelf_client import BookshelfClient, SessionController


def test_starts_logged_out_with_empty_store(client):
    assert SessionController(client).authenticated is False


def test_starts_logged_in_when_key_stored(logged_in_store, transport):
    client = BookshelfClient("http://bookshelf.test", store=logged_in_store, session=transport)
    assert SessionController(client).authenticated is True


def test_mark_logged_in(client):
    controller = SessionController(client)
    controller.mark_logged_in()
    assert controller.authenticated is True


def test_mark_logged_out_clears_store(logged_in_store, transport):
    client = BookshelfClient("http://bookshelf.test", store=logged_in_store, session=transport)
    controller = SessionController(client)
    controller.mark_logged_out()
    assert controller.authenticated is False
    assert logged_in_store.get("api_key") is None
    assert logged_in_store.get("user_id") is None
    assert transport.request.call_count == 0
