"""Tax calendar: statutory deadlines with projected amounts."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from smbtax.domain.entities import Direction, Regime, RegimeConfig, Transaction
from smbtax.domain.tax import FIXED_CONTRIBUTIONS, calculate, round_money, variable_contributions


class DeadlineKind(str, Enum):
    """How the amount owed at a deadline is determined."""

    ADVANCE = "advance"
    FIXED_CONTRIBUTION = "fixed_contribution"
    VARIABLE_CONTRIBUTION = "variable_contribution"


@dataclass(frozen=True)
class Deadline:
    """Statutory payment deadline.

    ``year`` is the tax year the covered months belong to; the due date of
    the last quarter and of the income surcharge falls in the next year.
    An empty ``months`` means the payment is not tied to a closed period.
    """

    label: str
    due: date
    kind: DeadlineKind
    year: int
    quarter: Optional[int] = None
    months: tuple[int, ...] = ()
    amount: Optional[Decimal] = None


@dataclass(frozen=True)
class Obligation:
    """A deadline with the amount projected from the ledger."""

    deadline: Deadline
    projected_amount: Optional[Decimal]
    is_current: bool
    overdue: bool


def quarter_of(day: date) -> int:
    """Calendar quarter (1-4) a day falls in."""
    return (day.month - 1) // 3 + 1


def quarter_months(quarter: int) -> tuple[int, ...]:
    """Months (1-12) covered by a calendar quarter."""
    if quarter not in (1, 2, 3, 4):
        raise ValueError(f"Quarter must be between 1 and 4, got {quarter}")
    first = (quarter - 1) * 3 + 1
    return (first, first + 1, first + 2)


def statutory_deadlines(year: int) -> list[Deadline]:
    """Advance payment and contribution deadlines for a tax year."""
    return [
        Deadline(f"Аванс УСН Q1 {year}", date(year, 4, 28), DeadlineKind.ADVANCE, year, 1, quarter_months(1)),
        Deadline(f"Аванс УСН Q2 {year}", date(year, 7, 28), DeadlineKind.ADVANCE, year, 2, quarter_months(2)),
        Deadline(f"Аванс УСН Q3 {year}", date(year, 10, 28), DeadlineKind.ADVANCE, year, 3, quarter_months(3)),
        Deadline(f"Годовой УСН {year}", date(year + 1, 3, 31), DeadlineKind.ADVANCE, year, 4, quarter_months(4)),
        Deadline(
            f"Страх. взносы (фикс.) {year}",
            date(year, 12, 31),
            DeadlineKind.FIXED_CONTRIBUTION,
            year,
            4,
            amount=FIXED_CONTRIBUTIONS,
        ),
        Deadline(
            f"Страх. взносы (1% >300к) {year}",
            date(year + 1, 7, 1),
            DeadlineKind.VARIABLE_CONTRIBUTION,
            year,
            months=tuple(range(1, 13)),
        ),
    ]


def transactions_in_months(
    ledger: Sequence[Transaction], year: int, months: Sequence[int]
) -> list[Transaction]:
    """Transactions dated in the given months of a year."""
    return [txn for txn in ledger if txn.date.year == year and txn.date.month in months]


def quarter_end(day: date) -> date:
    """Last day of the calendar quarter a day falls in."""
    first_month = (quarter_of(day) - 1) * 3 + 1
    return date(day.year, first_month, 1) + relativedelta(months=3, days=-1)


def payment_window(deadline: Deadline) -> tuple[date, date]:
    """First and last day on which a deadline is the obligation at hand.

    The window opens the day after the covered months close, or at the start
    of the due date's quarter for payments not tied to a closed period. It
    stays open until the end of the quarter the due date falls in, so a
    missed payment is reported overdue for the rest of that quarter.
    """
    last_day = quarter_end(deadline.due)
    if deadline.months:
        opens = date(deadline.year, max(deadline.months), 1) + relativedelta(months=1)
    else:
        opens = date(last_day.year, last_day.month - 2, 1)
    return min(opens, last_day), last_day


def project_obligations(
    ledger: Sequence[Transaction],
    config: RegimeConfig,
    deadlines: Optional[Sequence[Deadline]] = None,
    today: Optional[date] = None,
) -> list[Obligation]:
    """Project the amount owed at each deadline relevant to the current year.

    The table covers deadlines of the current tax year plus those of the
    previous year that fall due this year. A deadline is current while its
    payment window is open and overdue when it is current and its due date
    has passed; a deadline whose window has not opened is never overdue.
    Only the current advance payments get a projected amount, computed from
    the quarter they cover; the others report None.

    Args:
        ledger: Transactions of the business
        config: Regime configuration
        deadlines: Deadline table, defaults to the statutory one for last
            year and today's year
        today: Reference day, defaults to the current date

    Returns:
        Obligations sorted by due date
    """
    config.validate()
    today = today or date.today()
    if deadlines is None:
        deadlines = statutory_deadlines(today.year - 1) + statutory_deadlines(today.year)

    obligations = []
    for deadline in deadlines:
        if today.year not in (deadline.year, deadline.due.year):
            continue
        if deadline.kind == DeadlineKind.ADVANCE and config.regime == Regime.NONE:
            continue

        opens, closes = payment_window(deadline)
        is_current = opens <= today <= closes
        projected: Optional[Decimal] = None

        if deadline.kind == DeadlineKind.ADVANCE:
            if is_current:
                quarter_ledger = transactions_in_months(ledger, deadline.year, deadline.months)
                projected = calculate(quarter_ledger, config).net_tax
        elif deadline.amount is not None:
            projected = deadline.amount
        else:
            year_ledger = transactions_in_months(ledger, deadline.year, deadline.months)
            income = sum(
                (txn.amount for txn in year_ledger if txn.direction == Direction.INCOME),
                Decimal("0"),
            )
            projected = round_money(variable_contributions(income))

        obligations.append(
            Obligation(
                deadline=deadline,
                projected_amount=projected,
                is_current=is_current,
                overdue=is_current and deadline.due < today,
            )
        )

    return sorted(obligations, key=lambda obligation: obligation.deadline.due)
