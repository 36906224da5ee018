# ABOUTME: The `booklend lookup` command for resolving an ISBN to metadata.
# ABOUTME: Discovery mode asks external providers; --inventory confirms against our catalog.

import json as json_lib
from dataclasses import asdict
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from booklend.cli.options import db_option, json_option
from booklend.cli.runtime import open_service
from booklend.metadata.types import BookMetadata

console = Console()


def render_metadata(metadata: BookMetadata, title: str | None = None) -> Table:
    """Two-column Rich table of a metadata record."""
    table = Table(title=title, show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=12)
    table.add_column("Value")

    table.add_row("ISBN", metadata.isbn)
    table.add_row("Title", metadata.title)
    table.add_row("Author", metadata.author)
    table.add_row("Published", metadata.published_date or "[dim]unknown[/dim]")
    if metadata.thumbnail_url:
        table.add_row("Cover", metadata.thumbnail_url)
    table.add_row("Source", metadata.source)
    return table


@click.command("lookup")
@click.argument("isbn")
@click.option(
    "--inventory",
    is_flag=True,
    default=False,
    help="Only check our own catalog (no external providers).",
)
@json_option
@db_option
def lookup(isbn: str, inventory: bool, json_output: bool, db_path: Path | None) -> None:
    """Resolve ISBN to book metadata."""
    with open_service(db_path, console) as service:
        if inventory:
            metadata = service.resolve_catalog(isbn)
        else:
            metadata = service.resolve_discovery(isbn)

    if json_output:
        click.echo(json_lib.dumps(asdict(metadata), indent=2, ensure_ascii=False))
        return
    console.print(render_metadata(metadata))
