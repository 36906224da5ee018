# ABOUTME: The `booklend return` command for closing an open loan.
# ABOUTME: Closes the newest open loan for the ISBN and prints a receipt.

from pathlib import Path

import click
from rich.console import Console

from booklend.cli.options import db_option
from booklend.cli.runtime import open_service

console = Console()


@click.command("return")
@click.argument("isbn")
@db_option
def return_item(isbn: str, db_path: Path | None) -> None:
    """Record ISBN as returned."""
    with open_service(db_path, console) as service:
        receipt = service.return_item(isbn)

    console.print(
        f"[green]Returned[/green] {receipt.title} from {receipt.borrower.name} "
        f"on {receipt.returned_at}"
    )
