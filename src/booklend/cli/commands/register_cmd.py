# ABOUTME: The `booklend register` command for adding a title to the catalog.
# ABOUTME: Resolves metadata via the providers, asks for confirmation, then appends the entry.

from pathlib import Path

import click
from rich.console import Console

from booklend.cli.commands.lookup_cmd import render_metadata
from booklend.cli.options import db_option
from booklend.cli.runtime import open_service
from booklend.errors import NotFoundError
from booklend.isbn import normalize_isbn
from booklend.metadata.types import BookMetadata

console = Console()


@click.command("register")
@click.argument("isbn")
@click.option("--title", default=None, help="Title to register instead of looking it up.")
@click.option(
    "--author",
    "authors",
    multiple=True,
    help="Author name (repeatable). Used with --title.",
)
@click.option("--published", "published_date", default="", help="Publication date.")
@click.option("--cover", "thumbnail_url", default="", help="Cover image URL.")
@click.option("-y", "--yes", is_flag=True, default=False, help="Register without confirming.")
@db_option
def register(
    isbn: str,
    title: str | None,
    authors: tuple[str, ...],
    published_date: str,
    thumbnail_url: str,
    yes: bool,
    db_path: Path | None,
) -> None:
    """Register ISBN in the catalog.

    Without --title, metadata is fetched from the configured providers and
    shown for confirmation before anything is written.
    """
    with open_service(db_path, console) as service:
        if title:
            metadata = BookMetadata(
                isbn=normalize_isbn(isbn),
                title=title,
                authors=list(authors),
                published_date=published_date,
                thumbnail_url=thumbnail_url,
                source="manual",
            )
        else:
            try:
                metadata = service.resolve_discovery(isbn)
            except NotFoundError as exc:
                console.print(f"[yellow]{exc}.[/yellow] Use --title to register it by hand.")
                raise SystemExit(1) from exc

        console.print(render_metadata(metadata))
        if not yes and not click.confirm("Register this book?", default=True):
            console.print("[dim]Skipped.[/dim]")
            return

        entry = service.register(isbn, metadata)

    console.print(f"[green]Registered[/green] {entry.title} ({entry.isbn})")
