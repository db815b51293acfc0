"""Tax calendar command."""

import click
from smbtax.cli.error_handling import handle_domain_error
from smbtax.cli.formatting import format_whole
from smbtax.domain.errors import DomainError
from smbtax.domain.ledger import LedgerService
from smbtax.utils.date_parser import parse_date


@click.command("calendar")
@click.option("--today", "today_str", help="Reference date (default: today)")
@click.pass_context
def tax_calendar(ctx, today_str: str | None):
    """Show this year's tax deadlines, and last year's still due, with projected amounts."""
    service = LedgerService(ctx.obj["db"])

    today = None
    if today_str:
        try:
            today = parse_date(today_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        obligations = service.get_calendar(today=today)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nTax calendar:")
    for obligation in obligations:
        deadline = obligation.deadline
        amount = "-" if obligation.projected_amount is None else format_whole(obligation.projected_amount)
        if obligation.overdue:
            status = "OVERDUE"
        elif obligation.is_current:
            status = "current"
        else:
            status = ""
        click.echo(f"  {deadline.due:%d.%m.%Y}  {deadline.label:<36} {amount:>14}  {status}")


def register_commands(cli):
    """Register calendar command with main CLI."""
    cli.add_command(tax_calendar)
