# ABOUTME: The `booklend ls` command for listing the catalog with live lending status.
# ABOUTME: Displays a Rich table (or JSON) of every title, newest registration first.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from booklend.cli.options import db_option, json_option
from booklend.cli.runtime import open_service
from booklend.dates import format_date
from booklend.lending.mapping import BookStatus

console = Console()


def _status_to_dict(item: BookStatus) -> dict:
    loan = item.loan
    return {
        "isbn": item.entry.isbn,
        "title": item.entry.title,
        "authors": list(item.entry.authors),
        "thumbnail_url": item.entry.thumbnail_url,
        "status": item.status,
        "loan": (
            {
                "due_at": format_date(loan.due_at),
                "borrower_name": loan.borrower.name,
                "borrower_email": loan.borrower.email,
            }
            if loan is not None
            else None
        ),
    }


@click.command("ls")
@click.option("--lent", "lent_only", is_flag=True, default=False, help="Only show lent books.")
@json_option
@db_option
def ls(lent_only: bool, json_output: bool, db_path: Path | None) -> None:
    """List all books in the catalog with their lending status."""
    with open_service(db_path, console) as service:
        statuses = service.list_status()

    if lent_only:
        statuses = [s for s in statuses if s.loan is not None]

    if json_output:
        click.echo(
            json_lib.dumps([_status_to_dict(s) for s in statuses], indent=2, ensure_ascii=False)
        )
        return

    if not statuses:
        console.print("[yellow]No books in the catalog.[/yellow]")
        return

    table = Table()
    table.add_column("ISBN", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Status")
    table.add_column("Due")
    table.add_column("Borrower")

    for item in statuses:
        loan = item.loan
        table.add_row(
            item.entry.isbn,
            item.entry.title,
            ", ".join(item.entry.authors) or "[dim]unknown[/dim]",
            "[red]lent[/red]" if loan else "[green]available[/green]",
            format_date(loan.due_at) if loan else "",
            loan.borrower.name if loan else "",
        )

    lent = sum(1 for s in statuses if s.loan is not None)
    console.print(table)
    console.print(f"\n[dim]{len(statuses)} book(s), {lent} lent[/dim]")
