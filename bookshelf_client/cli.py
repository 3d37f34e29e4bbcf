"""Interactive CLI: ``bookshelf`` command — browse shelves and books."""

from __future__ import annotations

import logging
from typing import Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from .client import BookshelfClient
from .config import Settings
from .errors import APIError, ErrorKind, describe
from .session import SessionController

console = Console()
logger = logging.getLogger(__name__)


class _LoggedOut(Exception):
    """Raised by a flow when the server rejected the stored session."""


# ──────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _warn(msg: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {msg}")


def _press_enter() -> None:
    console.print()
    Prompt.ask("[dim]Press Enter to return to menu[/dim]", default="")


def _report(err: APIError, subject: str) -> None:
    """Render ``err``; an unauthorized reply ends the session."""
    _warn(describe(err, subject))
    if err.kind is ErrorKind.UNAUTHORIZED:
        raise _LoggedOut() from err


# ──────────────────────────────────────────────
# Login
# ──────────────────────────────────────────────

def _flow_login(client: BookshelfClient, controller: SessionController) -> bool:
    """Prompt for email/password until login succeeds. Returns False to quit."""
    console.print(Panel(
        "[bold]Sign in to your bookshelf.[/bold]\n"
        f"[dim]Server: {client.base_url}[/dim]",
        title="[bold bright_cyan]Book Tracker[/bold bright_cyan]",
        border_style="bright_cyan",
        padding=(1, 2),
    ))

    while True:
        email = Prompt.ask("[bold yellow]Email[/bold yellow]").strip()
        password = Prompt.ask("[bold yellow]Password[/bold yellow]", password=True)
        if not email or not password:
            _warn("Please enter email and password")
        else:
            try:
                with console.status("[bold cyan]Signing in...[/bold cyan]", spinner="dots"):
                    client.login(email, password)
            except APIError as e:
                _warn(describe(e, "login"))
            else:
                controller.mark_logged_in()
                console.print("[bright_green]Logged in.[/bright_green]")
                return True

        if not Confirm.ask("[bold]Try again?[/bold]", default=True):
            return False


# ──────────────────────────────────────────────
# Shelves and books
# ──────────────────────────────────────────────

def _flow_shelves(client: BookshelfClient) -> None:
    try:
        with console.status("[bold cyan]Loading shelves...[/bold cyan]", spinner="dots"):
            data = client.get_shelves()
    except APIError as e:
        _report(e, "shelves")
        return

    if not data.shelves:
        console.print(f"[dim]{data.user} has no shelves yet.[/dim]")
        return

    table = Table(
        title=f"Shelves — {data.user}",
        box=box.ROUNDED,
        border_style="dim",
        header_style="bold bright_cyan",
    )
    table.add_column("ID", style="bold cyan", justify="right")
    table.add_column("Name", style="bright_yellow")
    table.add_column("Books", justify="right")
    for shelf in data.shelves:
        table.add_row(str(shelf.id), shelf.name, str(shelf.book_count))
    console.print(table)


def _flow_shelf(client: BookshelfClient, shelf_id: Optional[int] = None) -> None:
    if shelf_id is None:
        shelf_id = IntPrompt.ask("[bold yellow]Shelf ID[/bold yellow]")
    try:
        with console.status("[bold cyan]Loading books...[/bold cyan]", spinner="dots"):
            shelf = client.get_shelf(shelf_id)
    except APIError as e:
        _report(e, "books")
        return

    if not shelf.books:
        console.print(Panel(
            "This shelf doesn't have any books yet.",
            title=f"[bold bright_cyan]{shelf.name}[/bold bright_cyan]",
            border_style="dim",
            padding=(1, 2),
        ))
        return

    table = Table(
        title=shelf.name,
        box=box.ROUNDED,
        border_style="dim",
        header_style="bold bright_cyan",
    )
    table.add_column("ID", style="bold cyan", justify="right")
    table.add_column("Title", style="bright_yellow")
    table.add_column("Author", style="bright_green")
    table.add_column("ISBN", style="dim")
    for book in shelf.books:
        table.add_row(str(book.id), book.title, book.author or "", book.isbn or "")
    console.print(table)


def _flow_book(client: BookshelfClient, book_id: Optional[int] = None) -> None:
    if book_id is None:
        book_id = IntPrompt.ask("[bold yellow]Book ID[/bold yellow]")
    try:
        with console.status("[bold cyan]Loading book...[/bold cyan]", spinner="dots"):
            book = client.get_book(book_id)
    except APIError as e:
        _report(e, "book details")
        return

    info = Table.grid(padding=(0, 2))
    info.add_column(style="bold")
    info.add_column()
    if book.author:
        info.add_row("Author:", f"[bright_green]{book.author}[/bright_green]")
    if book.isbn:
        info.add_row("ISBN:", book.isbn)
    info.add_row("Shelf:", f"[bright_yellow]{book.shelf_name}[/bright_yellow]")
    if book.image_url:
        info.add_row("Cover:", f"[dim]{book.image_url}[/dim]")

    console.print(Panel(
        info,
        title=f"[bold bright_cyan]{book.title}[/bold bright_cyan]",
        border_style="bright_cyan",
        padding=(1, 2),
    ))
    if book.comments:
        console.print(Panel(book.comments, title="[bold]Notes[/bold]", border_style="dim"))


# ──────────────────────────────────────────────
# Main menu
# ──────────────────────────────────────────────

def _main_menu() -> str:
    menu = Table.grid(padding=(0, 2))
    menu.add_column(width=3, style="bold cyan")
    menu.add_column()
    menu.add_row("1", "[bright_green]Shelves[/bright_green] — List your shelves")
    menu.add_row("2", "[bright_green]Open shelf[/bright_green] — Books on a shelf")
    menu.add_row("3", "[bright_green]Open book[/bright_green] — Book details")
    menu.add_row("4", "Logout")
    menu.add_row("0", "[dim]Exit[/dim]")

    console.print(Panel(
        menu,
        title="[bold bright_cyan]Menu[/bold bright_cyan]",
        border_style="bright_cyan",
        padding=(1, 2),
    ))

    return Prompt.ask(
        "[bold yellow]Select option[/bold yellow]",
        choices=["0", "1", "2", "3", "4"],
        default="1",
    )


# ──────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────

def main() -> None:
    settings = Settings.from_env()
    _configure_logging(settings.log_level)

    client = BookshelfClient.from_settings(settings)
    controller = SessionController(client)
    logger.debug("Starting with %r, authenticated=%s", client, controller.authenticated)

    while True:
        try:
            if not controller.authenticated and not _flow_login(client, controller):
                console.print("[dim]Goodbye.[/dim]")
                break

            choice = _main_menu()

            if choice == "0":
                console.print("[dim]Goodbye.[/dim]")
                break
            if choice == "1":
                _flow_shelves(client)
            elif choice == "2":
                _flow_shelf(client)
            elif choice == "3":
                _flow_book(client)
            elif choice == "4":
                controller.mark_logged_out()
                console.print("[bright_green]Logged out.[/bright_green]")
                continue

            _press_enter()

        except _LoggedOut:
            controller.mark_logged_out()
        except KeyboardInterrupt:
            console.print()
            if Confirm.ask("[bold yellow]Exit Book Tracker?[/bold yellow]", default=False):
                console.print("[dim]Goodbye.[/dim]")
                break


if __name__ == "__main__":
    main()
