"""Tests for the CLI flows with a stubbed client."""

from unittest.mock import Mock

import pytest
from rich.console import Console

from bookshelf_client import APIError, SessionController, cli
from bookshelf_client.models import ShelfDetail

from conftest import make_response


@pytest.fixture
def output(monkeypatch):
    console = Console(record=True, width=120)
    monkeypatch.setattr(cli, "console", console)
    return console


def test_empty_shelf_message(output):
    client = Mock()
    client.get_shelf.return_value = ShelfDetail(id=1, name="Reading")
    cli._flow_shelf(client, shelf_id=1)
    assert "This shelf doesn't have any books yet." in output.export_text()


def test_server_error_is_reported(output):
    client = Mock()
    client.get_book.side_effect = APIError.server_error(500)
    cli._flow_book(client, book_id=3)
    assert "Server error (500). Please try again." in output.export_text()


def test_unauthorized_ends_session(output):
    client = Mock()
    client.get_shelves.side_effect = APIError.unauthorized(status_code=401)
    with pytest.raises(cli._LoggedOut):
        cli._flow_shelves(client)
    assert "Session expired" in output.export_text()


def _answers(monkeypatch, prompts=(), confirms=()):
    prompt_iter = iter(prompts)
    confirm_iter = iter(confirms)
    monkeypatch.setattr(cli.Prompt, "ask", lambda *a, **k: next(prompt_iter))
    monkeypatch.setattr(cli.Confirm, "ask", lambda *a, **k: next(confirm_iter))


@pytest.fixture
def run_main(monkeypatch, client):
    monkeypatch.setattr(cli, "_configure_logging", lambda level: None)
    monkeypatch.setattr(cli.BookshelfClient, "from_settings", staticmethod(lambda settings: client))
    return cli.main


# ── Login ──

def test_login_rejects_empty_input_then_succeeds(output, monkeypatch, client, transport, store):
    transport.request.return_value = make_response(200, {"user_id": 7, "api_key": "k1"})
    _answers(monkeypatch, prompts=["", "", "a@b.com", "pw"], confirms=[True])
    controller = SessionController(client)

    assert cli._flow_login(client, controller) is True
    assert controller.authenticated is True
    assert store.get("api_key") == "k1"
    assert transport.request.call_count == 1
    assert "Please enter email and password" in output.export_text()


def test_login_failure_then_quit(output, monkeypatch, client, transport, store):
    transport.request.return_value = make_response(401)
    _answers(monkeypatch, prompts=["a@b.com", "wrong"], confirms=[False])
    controller = SessionController(client)

    assert cli._flow_login(client, controller) is False
    assert controller.authenticated is False
    assert store.get("api_key") is None
    assert "Invalid email or password" in output.export_text()


# ── Main loop ──

def test_unauthorized_reply_logs_out_and_returns_to_login(output, monkeypatch, run_main,
                                                         transport, logged_in_store):
    transport.request.return_value = make_response(401)
    # menu "Shelves", then an empty login attempt that is not retried
    _answers(monkeypatch, prompts=["1", "", ""], confirms=[False])

    run_main()

    assert logged_in_store.get("api_key") is None
    assert logged_in_store.get("user_id") is None
    text = output.export_text()
    assert "Session expired. Please log in again." in text
    assert "Sign in to your bookshelf." in text
    assert "Goodbye." in text


def test_interrupt_at_login_asks_before_exit(output, monkeypatch, run_main):
    def interrupt(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli.Prompt, "ask", interrupt)
    monkeypatch.setattr(cli.Confirm, "ask", lambda *a, **k: True)

    run_main()

    assert "Goodbye." in output.export_text()


def test_declining_login_exits_normally(output, monkeypatch, run_main):
    _answers(monkeypatch, prompts=["", ""], confirms=[False])
    run_main()
    assert "Goodbye." in output.export_text()
