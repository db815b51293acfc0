"""Bank statement import command."""

from pathlib import Path

import click
from smbtax.cli.error_handling import handle_domain_error
from smbtax.cli.formatting import format_money
from smbtax.domain.errors import DomainError, strategy_required
from smbtax.domain.ledger import LedgerService
from smbtax.domain.reconciliation import ImportStrategy
from smbtax.utils.encoding import decode_statement


@click.command("import")
@click.argument("statement_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in ImportStrategy], case_sensitive=False),
    help="How to combine with a non-empty ledger: replace it or merge without duplicates",
)
@click.option("--encoding", help="Statement encoding (default: UTF-8, falling back to cp1251)")
@click.pass_context
def import_statement(ctx, statement_file: str, strategy: str | None, encoding: str | None):
    """Import transactions from a 1C client-bank statement (1c_to_kl.txt)."""
    service = LedgerService(ctx.obj["db"])

    try:
        text = decode_statement(Path(statement_file).read_bytes(), encoding=encoding)
        report = service.import_statement(
            text, strategy=ImportStrategy(strategy.lower()) if strategy else None
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    preview = report.reconciliation.preview
    click.echo("\nStatement:")
    click.echo(f"  Transactions: {preview.new_count}")
    click.echo(f"  Income: {preview.income_count} ({format_money(preview.income_total)})")
    click.echo(f"  Expense: {preview.expense_count} ({format_money(preview.expense_total)})")
    if report.extraction.skipped:
        click.echo(f"  Skipped documents: {report.extraction.skipped}")
    click.echo(f"  Ledger before import: {preview.existing_count}")

    if not report.committed:
        click.echo(f"Error: {strategy_required(preview.existing_count)}", err=True)
        click.echo("Re-run with --strategy replace or --strategy merge.", err=True)
        ctx.exit(1)

    result = report.reconciliation
    click.echo(f"\nImport complete ({result.strategy.value}):")
    click.echo(f"  Imported: {result.added} transactions")
    click.echo(f"  Skipped: {result.skipped} duplicates")
    click.echo(f"  Ledger size: {len(result.ledger)}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statement)
