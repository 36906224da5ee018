# ABOUTME: The `booklend history` command for the full loan audit trail of one ISBN.
# ABOUTME: Renders a Rich table of borrow, due, and return dates per loan.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from booklend.cli.options import db_option
from booklend.cli.runtime import open_service

console = Console()


@click.command("history")
@click.argument("isbn")
@db_option
def history(isbn: str, db_path: Path | None) -> None:
    """Show every borrow/return cycle recorded for ISBN."""
    with open_service(db_path, console) as service:
        loans = service.history(isbn)

    if not loans:
        console.print("[yellow]No loans recorded.[/yellow]")
        return

    table = Table()
    table.add_column("Borrowed")
    table.add_column("Due")
    table.add_column("Returned")
    table.add_column("Borrower", style="bold")
    table.add_column("Group")

    for loan in loans:
        table.add_row(
            str(loan.borrowed_at),
            str(loan.due_at),
            str(loan.returned_at) if loan.returned_at else "[yellow]open[/yellow]",
            loan.borrower.name,
            loan.borrower.group,
        )

    console.print(table)
    console.print(f"\n[dim]{len(loans)} loan(s)[/dim]")
