"""Tax summary command."""

import click
from smbtax.cli.date_filters import PERIOD_CHOICES, resolve_cli_date_range
from smbtax.cli.error_handling import handle_domain_error
from smbtax.cli.formatting import format_whole
from smbtax.domain.errors import DomainError
from smbtax.domain.ledger import LedgerService
from smbtax.domain.tax import SAFE_LOAD_THRESHOLD, is_load_elevated
from smbtax.utils.amount_parser import parse_amount


@click.command("tax")
@click.option("--start-date", help="Start date (DD.MM.YYYY or relative like 'this year')")
@click.option("--end-date", help="End date (DD.MM.YYYY or relative like 'today')")
@click.option("--period", type=PERIOD_CHOICES, help="Named period instead of explicit dates")
@click.option(
    "--contributions",
    help="Contributions actually paid (default: statutory fixed + 1% estimate)",
)
@click.pass_context
def tax_summary(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    contributions: str | None,
):
    """Show income, expense and the tax owed under the profile's regime."""
    service = LedgerService(ctx.obj["db"])
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    paid = None
    if contributions is not None:
        try:
            paid = parse_amount(contributions)
        except ValueError as e:
            click.echo(f"Error: Invalid contributions amount: {e}", err=True)
            ctx.exit(1)

    try:
        result = service.get_tax_result(start_date=start, end_date=end, contributions=paid)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nTax summary:")
    click.echo(f"  Income: {format_whole(result.income)}")
    click.echo(f"  Expense: {format_whole(result.expense)}")
    if result.taxable_income != result.income:
        click.echo(f"  Taxable income (excl. fixed fee): {format_whole(result.taxable_income)}")
    click.echo(f"  Gross tax: {format_whole(result.gross_tax)}")
    click.echo(f"  Contribution deduction: {format_whole(result.total_deductible)}")
    click.echo(f"  Net tax: {format_whole(result.net_tax)}")
    click.echo(f"  Profit: {format_whole(result.profit)}")
    click.echo(f"  Tax load: {result.load_ratio}%")
    if is_load_elevated(result):
        click.echo(f"  Warning: tax load is above the safe threshold of {SAFE_LOAD_THRESHOLD}%")


def register_commands(cli):
    """Register tax command with main CLI."""
    cli.add_command(tax_summary)
