"""Business profile commands."""

import click
from smbtax.cli.error_handling import handle_domain_error
from smbtax.domain.entities import Regime, RegimeConfig
from smbtax.domain.errors import DomainError
from smbtax.domain.profile import ProfileService

REGIME_LABELS = {
    Regime.FLAT_REVENUE: "Flat revenue (6%)",
    Regime.REVENUE_MINUS_EXPENSE: "Revenue minus expense (15%, 1% minimum)",
    Regime.NONE: "None",
}


def _echo_profile(config: RegimeConfig) -> None:
    click.echo(f"  Regime: {REGIME_LABELS[config.regime]}")
    click.echo(f"  Fixed-fee add-on: {'yes' if config.has_fixed_fee_addon else 'no'}")
    if config.fixed_fee_account:
        click.echo(f"  Fixed-fee account: {config.fixed_fee_account}")
    click.echo(f"  Employees: {'yes' if config.has_employees else 'no'}")
    click.echo(f"  INN: {config.inn or 'not set'}")


@click.group()
def profile_group():
    """Manage the business tax profile."""
    pass


@profile_group.command("show")
@click.pass_context
def show_profile(ctx) -> None:
    """Show the current regime configuration."""
    service = ProfileService(ctx.obj["db"])
    click.echo("Business profile:")
    _echo_profile(service.get_profile())


@profile_group.command("set")
@click.option(
    "--regime",
    type=click.Choice([r.value for r in Regime], case_sensitive=False),
    help="Primary tax regime",
)
@click.option("--fixed-fee/--no-fixed-fee", default=None, help="Combine with the fixed-fee license regime")
@click.option("--employees/--no-employees", default=None, help="Whether the business has employees")
@click.option("--fixed-fee-account", help="Account fragment receiving fixed-fee income (empty to clear)")
@click.option("--inn", help="Business tax identifier, 10 or 12 digits (empty to clear)")
@click.pass_context
def set_profile(
    ctx,
    regime: str | None,
    fixed_fee: bool | None,
    employees: bool | None,
    fixed_fee_account: str | None,
    inn: str | None,
) -> None:
    """Update the regime configuration.

    Examples:
        smbtax profile set --regime flat_revenue --inn 771234567890
        smbtax profile set --fixed-fee --fixed-fee-account 4567
    """
    service = ProfileService(ctx.obj["db"])
    try:
        config = service.update_profile(
            regime=Regime(regime.lower()) if regime else None,
            has_fixed_fee_addon=fixed_fee,
            has_employees=employees,
            fixed_fee_account=fixed_fee_account,
            inn=inn,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo("Profile updated:")
    _echo_profile(config)


def register_commands(cli: click.Group) -> None:
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
