"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

STATEMENT_DATE_FORMAT = "%d.%m.%Y"


def parse_statement_date(date_str: str) -> date:
    """Parse a statement date in strict DD.MM.YYYY form.

    Args:
        date_str: Date string such as "15.01.2026"

    Returns:
        Date object

    Raises:
        ValueError: If the string is not a valid DD.MM.YYYY date
    """
    parts = date_str.strip().split(".")
    if len(parts) != 3 or len(parts[2]) != 4:
        raise ValueError(f"Could not parse statement date '{date_str}'")
    return datetime.strptime(date_str.strip(), STATEMENT_DATE_FORMAT).date()


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2026-01-15", "15.01.2026", "January 15, 2026", etc.
    - Relative dates: "today", "yesterday", "last month", "this quarter", etc.

    Day-first order is assumed for ambiguous numeric dates.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "quarter":
            return _quarter_start(today) - relativedelta(months=3)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "quarter":
            return _quarter_start(today)
        elif period == "year":
            return today.replace(month=1, day=1)

    # ISO dates are year-first regardless of the day-first default
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _quarter_start(day: date) -> date:
    return day.replace(month=(day.month - 1) // 3 * 3 + 1, day=1)


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-quarter, this-year,
            last-month, last-quarter, last-year)
        today: Reference day, defaults to the current date

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-quarter":
        return (_quarter_start(today), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-quarter":
        end_date = _quarter_start(today) - timedelta(days=1)
        return (_quarter_start(end_date), end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-quarter, "
            "this-year, last-month, last-quarter, last-year"
        )
