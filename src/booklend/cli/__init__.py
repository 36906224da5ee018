# ABOUTME: CLI package for booklend, built on Click.
# ABOUTME: Defines the root command group, loads configuration, and registers subcommands.

import logging

import click
from dotenv import load_dotenv
from rich.logging import RichHandler

from booklend.cli.commands import (
    borrow_cmd,
    history_cmd,
    lookup_cmd,
    ls_cmd,
    register_cmd,
    remind_cmd,
    return_cmd,
)
from booklend.cli.runtime import load_settings


@click.group()
@click.version_option(package_name="booklend")
@click.option(
    "-v", "--verbose", is_flag=True, default=False, help="Log provider and store activity."
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """booklend - book inventory and lending ledger."""
    load_dotenv()
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )
    ctx.obj = load_settings()


cli.add_command(lookup_cmd.lookup)
cli.add_command(register_cmd.register)
cli.add_command(borrow_cmd.borrow)
cli.add_command(return_cmd.return_item)
cli.add_command(ls_cmd.ls)
cli.add_command(history_cmd.history)
cli.add_command(remind_cmd.remind)
