"""Shared output formatting for CLI commands."""

from decimal import Decimal


def format_money(amount: Decimal) -> str:
    """Format an amount with space grouping and the ruble sign."""
    return f"{amount:,.2f} ₽".replace(",", " ")


def format_whole(amount: Decimal) -> str:
    """Format a whole-ruble amount."""
    return f"{amount:,.0f} ₽".replace(",", " ")
