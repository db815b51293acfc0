"""Amount parsing utilities."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import re

# Amounts are stored with two decimal places
CENTS = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles the formats found in bank statements and typed by hand:
    - "123.45"
    - "123,45" (comma as decimal separator)
    - "1 234,56" (spaces or non-breaking spaces as thousands separator)
    - "1.234,56"
    - "-123,45"
    - "123,45 ₽"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount rounded half up to two decimal places

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols and every kind of whitespace
    cleaned = re.sub(r"[\s₽$€]|руб\.?", "", amount_str.strip())

    # Comma is the decimal separator, dots before it group thousands
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")

    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}': too many digits")
