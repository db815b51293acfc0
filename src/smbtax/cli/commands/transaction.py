"""Transaction management commands."""

import click
from smbtax.cli.date_filters import PERIOD_CHOICES, resolve_cli_date_range
from smbtax.cli.error_handling import handle_domain_error
from smbtax.cli.formatting import format_money
from smbtax.domain.entities import Direction
from smbtax.domain.errors import DomainError
from smbtax.domain.ledger import LedgerService
from smbtax.utils.date_parser import parse_date
from smbtax.utils.amount_parser import parse_amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (DD.MM.YYYY or relative like 'this quarter')")
@click.option("--end-date", help="End date (DD.MM.YYYY or relative like 'today')")
@click.option("--period", type=PERIOD_CHOICES, help="Named period instead of explicit dates")
@click.option("--verbose", "-v", is_flag=True, help="Show IDs, accounts and full notes")
@click.pass_context
def list_transactions(ctx, start_date: str, end_date: str, period: str, verbose: bool):
    """View transactions, most recent first."""
    service = LedgerService(ctx.obj["db"])
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    transactions = service.list_transactions(start_date=start, end_date=end)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date:%d.%m.%Y}")
            click.echo(f"  Amount: {format_money(txn.amount)}")
            click.echo(f"  Direction: {txn.direction.value}")
            click.echo(f"  Category: {txn.category}")
            if txn.account_number:
                click.echo(f"  Account: {txn.account_number}")
            if txn.is_fixed_fee:
                click.echo("  Regime: fixed fee")
            if txn.note:
                click.echo(f"  Note: {txn.note}")
            click.echo("-" * 100)
    else:
        click.echo("-" * 100)
        click.echo(f"{'ID':<10} {'Date':<12} {'Amount':>16}  {'Type':<8} {'Category':<12} {'Note':<36}")
        click.echo("-" * 100)
        for txn in transactions:
            kind = "FIX" if txn.is_fixed_fee else txn.direction.value[:3].upper()
            click.echo(
                f"{txn.id[:8]:<10} {txn.date:%d.%m.%Y}   {format_money(txn.amount):>16}  "
                f"{kind:<8} {txn.category:<12} {txn.note[:36]:<36}"
            )

    total_income = sum(t.amount for t in transactions if t.direction == Direction.INCOME)
    total_expense = sum(t.amount for t in transactions if t.direction == Direction.EXPENSE)
    click.echo("-" * 100)
    click.echo(
        f"TOTAL  Income: {format_money(total_income)} | "
        f"Expense: {format_money(total_expense)} | Count: {len(transactions)}"
    )


def _resolve_id(ctx, service: LedgerService, transaction_id: str) -> str:
    """Resolve a full ID or a unique ID prefix as shown by `list`."""
    if service.get_transaction(transaction_id) is not None:
        return transaction_id
    matches = [t.id for t in service.get_ledger() if t.id.startswith(transaction_id)]
    if len(matches) == 1:
        return matches[0]
    if matches:
        click.echo(f"Error: Transaction ID prefix '{transaction_id}' is ambiguous", err=True)
    else:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
    ctx.exit(1)


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--date", help="Transaction date (DD.MM.YYYY or relative like 'today')")
@click.option("--amount", help="Transaction amount")
@click.option("--direction", type=click.Choice([d.value for d in Direction]), help="income or expense")
@click.option("--category", help="Category")
@click.option("--note", help="Payment purpose")
@click.option("--account", help="Account number")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    date: str | None,
    amount: str | None,
    direction: str | None,
    category: str | None,
    note: str | None,
    account: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        smbtax transaction update 3f2a9c1e --amount 7500
        smbtax transaction update 3f2a9c1e --direction expense --category Аренда
    """
    service = LedgerService(ctx.obj["db"])
    full_id = _resolve_id(ctx, service, transaction_id)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_transaction(
            full_id,
            date=txn_date,
            amount=txn_amount,
            direction=Direction(direction) if direction else None,
            category=category,
            note=note,
            account_number=account,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {full_id}")


@transaction_group.command("toggle-fixed-fee")
@click.argument("transaction_id")
@click.pass_context
def toggle_fixed_fee(ctx, transaction_id: str) -> None:
    """Move a transaction in or out of the fixed-fee regime."""
    service = LedgerService(ctx.obj["db"])
    full_id = _resolve_id(ctx, service, transaction_id)
    try:
        txn = service.toggle_fixed_fee(full_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    state = "fixed fee" if txn.is_fixed_fee else "primary regime"
    click.echo(f"Transaction {full_id} is now taxed under the {state}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction.

    Examples:
        smbtax transaction delete 3f2a9c1e
    """
    service = LedgerService(ctx.obj["db"])
    full_id = _resolve_id(ctx, service, transaction_id)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {full_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(full_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {full_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
