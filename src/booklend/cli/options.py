# ABOUTME: Shared Click options for booklend CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db and --json.

from pathlib import Path

import click

from booklend.config import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to the booklend store (default: $BOOKLEND_DB or {DEFAULT_DB_PATH})",
)

json_option = click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
