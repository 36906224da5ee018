# ABOUTME: The `booklend borrow` command for lending a catalogued book.
# ABOUTME: The borrower identity comes from --email/--name as supplied by the sign-in layer.

from pathlib import Path

import click
from rich.console import Console

from booklend.cli.options import db_option
from booklend.cli.runtime import open_service
from booklend.lending.mapping import UNKNOWN_BORROWER, Borrower

console = Console()


@click.command("borrow")
@click.argument("isbn")
@click.option("-g", "--group", required=True, help="Borrower's team or affiliation.")
@click.option(
    "--email",
    envvar="BOOKLEND_USER_EMAIL",
    default=None,
    help="Verified account email of the borrower (default: $BOOKLEND_USER_EMAIL).",
)
@click.option(
    "--name",
    envvar="BOOKLEND_USER_NAME",
    default=UNKNOWN_BORROWER,
    help="Display name of the borrower (default: $BOOKLEND_USER_NAME).",
)
@click.option("--title", default=None, help="Title to record (default: catalog title).")
@db_option
def borrow(
    isbn: str,
    group: str,
    email: str | None,
    name: str,
    title: str | None,
    db_path: Path | None,
) -> None:
    """Lend ISBN to the signed-in borrower for two weeks."""
    identity = Borrower(email=email, name=name) if email else None
    with open_service(db_path, console) as service:
        loan = service.borrow(isbn, identity, group, title=title)

    console.print(
        f"[green]Lent[/green] {loan.title} to {loan.borrower.name} "
        f"({loan.borrowed_at} -> due [bold]{loan.due_at}[/bold])"
    )
