"""CLI error handling helpers."""

import click

from smbtax.domain.errors import (
    DomainError,
    RegimeConfigurationError,
    UnrecognizedFormatError,
)

ERROR_HINTS = {
    UnrecognizedFormatError: "Export the statement from the bank client in 1C format (1c_to_kl.txt).",
    RegimeConfigurationError: "Fix the business profile with 'smbtax profile set'.",
}


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error, with a hint where one helps, and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    for error_type, hint in ERROR_HINTS.items():
        if isinstance(error, error_type):
            click.echo(hint, err=True)
            break
    ctx.exit(1)
