"""Main CLI entry point."""

import logging

import click
from smbtax.database.factories import DB_PATH_ENV, create_sqlite_database

# Import and register all commands at module level
from smbtax.cli.commands import (
    add,
    calendar,
    import_cmd,
    profile,
    tax,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Log import and parsing details")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """smbtax - Bank statements to simplified-regime taxes.

    Import 1C client-bank statements, keep a ledger of income and expenses,
    and compute the tax owed under the flat-revenue or revenue-minus-expense
    regime, optionally combined with a fixed-fee license.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
profile.register_commands(cli)
import_cmd.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
tax.register_commands(cli)
calendar.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
