# ABOUTME: The `booklend remind` command, meant to be run daily by a scheduler.
# ABOUTME: Emails borrowers whose loans are due in two days and reports what was sent.

from datetime import date
from pathlib import Path

import click
from rich.console import Console

from booklend.cli.options import db_option
from booklend.cli.runtime import open_service
from booklend.dates import parse_date

console = Console()


def _parse_day(ctx: click.Context, param: click.Parameter, value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as exc:
        raise click.BadParameter("expected YYYY-MM-DD") from exc


@click.command("remind")
@click.option(
    "--date",
    "today",
    default=None,
    callback=_parse_day,
    help="Run the sweep as if today were YYYY-MM-DD (default: today).",
)
@db_option
def remind(today: date | None, db_path: Path | None) -> None:
    """Send due-soon reminders for open loans."""
    with open_service(db_path, console) as service:
        result = service.run_reminder_sweep(today)

    if not result.targets:
        console.print(f"No loans due on {result.target_date}.")
        return

    console.print(f"[bold]{len(result.targets)} loan(s) due on {result.target_date}[/bold]")
    for loan in result.sent:
        console.print(f"  [green]sent[/green] {loan.borrower.email}: {loan.title}")
    for loan in result.already_reminded:
        console.print(f"  [dim]already reminded[/dim] {loan.borrower.email}: {loan.title}")
    for loan in result.skipped_no_email:
        console.print(f"  [dim]no email[/dim] {loan.borrower.name}: {loan.title}")
    for loan in result.failed:
        console.print(f"  [red]failed[/red] {loan.borrower.email}: {loan.title}")
    for loan in result.unrecorded:
        console.print(
            f"  [yellow]not recorded[/yellow] {loan.borrower.email}: {loan.title} "
            "(may be sent again next run)"
        )
