"""Utility functions for smbtax."""

from smbtax.utils.date_parser import parse_date, parse_statement_date
from smbtax.utils.amount_parser import parse_amount
from smbtax.utils.encoding import decode_statement

__all__ = ["parse_date", "parse_statement_date", "parse_amount", "decode_statement"]
