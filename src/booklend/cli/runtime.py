# ABOUTME: Glue between Click commands and the LendingService.
# ABOUTME: Builds the service from settings and renders BooklendErrors as exit codes.

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click
from rich.console import Console

from booklend.config import Settings
from booklend.core.service import LendingService
from booklend.errors import BooklendError, ConfigurationError

EXIT_FAILURE = 1
EXIT_CONFIG = 2


def load_settings() -> Settings:
    """Read settings from the environment, exiting cleanly on bad values."""
    try:
        return Settings.from_env()
    except ConfigurationError as exc:
        Console(stderr=True).print(f"[red]Configuration error:[/red] {exc}")
        raise SystemExit(EXIT_CONFIG) from exc


@contextmanager
def open_service(db_path: Path | None, console: Console) -> Iterator[LendingService]:
    """Yield a LendingService for the current command and close it afterwards.

    Any BooklendError raised inside the block is printed and turned into a
    non-zero exit.
    """
    ctx = click.get_current_context()
    settings: Settings = ctx.obj if isinstance(ctx.obj, Settings) else load_settings()
    settings = settings.with_db_path(db_path)

    try:
        with LendingService.from_settings(settings) as service:
            yield service
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise SystemExit(EXIT_CONFIG) from exc
    except BooklendError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(EXIT_FAILURE) from exc
