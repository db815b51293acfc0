"""Add transaction command."""

import click
from smbtax.cli.error_handling import handle_domain_error
from smbtax.cli.formatting import format_money
from smbtax.domain.entities import Direction
from smbtax.domain.errors import DomainError
from smbtax.domain.ledger import LedgerService
from smbtax.utils.date_parser import parse_date
from smbtax.utils.amount_parser import parse_amount


@click.command("add")
@click.option(
    "--date",
    required=True,
    help="Transaction date (DD.MM.YYYY, YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 15000 or 15 000,50)")
@click.option(
    "--income/--expense",
    "is_income",
    default=True,
    help="Money received (default) or paid out",
)
@click.option("--category", help="Category (suggested from the note if omitted)")
@click.option("--note", default="", help="Payment purpose")
@click.option("--account", help="Account number the money moved through")
@click.option(
    "--fixed-fee/--no-fixed-fee",
    default=None,
    help="Tax under the fixed-fee regime (auto-detected from the profile's account if omitted)",
)
@click.pass_context
def add_transaction(
    ctx,
    date: str,
    amount: str,
    is_income: bool,
    category: str | None,
    note: str,
    account: str | None,
    fixed_fee: bool | None,
):
    """Add a transaction manually.

    Examples:
        smbtax add --date 15.01.2026 --amount 50000 --note "Оплата по договору 7"
        smbtax add --date today --amount 12000 --expense --note "Аренда офиса"
    """
    service = LedgerService(ctx.obj["db"])

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        txn = service.add_transaction(
            date=txn_date,
            amount=txn_amount,
            direction=Direction.INCOME if is_income else Direction.EXPENSE,
            category=category,
            note=note,
            account_number=account,
            fixed_fee=fixed_fee,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date:%d.%m.%Y}")
    click.echo(f"  Amount: {format_money(txn.amount)}")
    click.echo(f"  Direction: {txn.direction.value}")
    click.echo(f"  Category: {txn.category}")
    if txn.note:
        click.echo(f"  Note: {txn.note}")
    if txn.is_fixed_fee:
        click.echo("  Regime: fixed fee")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
