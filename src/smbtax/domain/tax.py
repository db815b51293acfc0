"""Tax computation for the simplified regimes.

Every intermediate value is an unrounded Decimal. Rounding to whole rubles
happens once, when a NetTax or TaxResult is built.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence, Union

from smbtax.domain.entities import (
    Direction,
    NetTax,
    Regime,
    RegimeConfig,
    TaxBase,
    TaxResult,
    Transaction,
)
from smbtax.domain.errors import RegimeConfigurationError

FLAT_RATE = Decimal("0.06")
PROFIT_RATE = Decimal("0.15")
MINIMUM_RATE = Decimal("0.01")

# Share of gross tax an employer may cover with contributions
EMPLOYER_DEDUCTION_CAP = Decimal("0.5")

# Mandatory contributions of an individual entrepreneur, 2026
FIXED_CONTRIBUTIONS = Decimal("53658")
VARIABLE_CONTRIBUTION_THRESHOLD = Decimal("300000")
VARIABLE_CONTRIBUTION_RATE = Decimal("0.01")
VARIABLE_CONTRIBUTION_CAP = Decimal("277571")

# Load ratio, in percent, above which callers warn the user
SAFE_LOAD_THRESHOLD = Decimal("6.0")

ZERO = Decimal("0")
WHOLE = Decimal("1")
ONE_DECIMAL = Decimal("0.1")


def round_money(value: Decimal) -> Decimal:
    """Round to whole currency units, half up."""
    return value.quantize(WHOLE, rounding=ROUND_HALF_UP)


def coerce_regime(regime: Union[Regime, RegimeConfig, str]) -> Regime:
    """Resolve a regime argument, or raise RegimeConfigurationError."""
    if isinstance(regime, RegimeConfig):
        return regime.validate().regime
    if isinstance(regime, Regime):
        return regime
    try:
        return Regime(regime)
    except ValueError:
        raise RegimeConfigurationError(f"Unknown tax regime: {regime!r}")


def _total(transactions: Sequence[Transaction], direction: Direction) -> Decimal:
    return sum((txn.amount for txn in transactions if txn.direction == direction), ZERO)


def compute_tax(
    ledger: Sequence[Transaction], regime: Union[Regime, RegimeConfig, str]
) -> TaxBase:
    """Compute the gross tax of a ledger under its primary regime.

    Transactions tagged for the fixed-fee regime stay in the income and
    expense totals but are left out of the base the primary regime taxes.

    Args:
        ledger: Transactions to tax
        regime: Primary regime, or the whole regime configuration

    Returns:
        Unrounded TaxBase

    Raises:
        RegimeConfigurationError: If the regime is unknown or misconfigured
    """
    primary = coerce_regime(regime)
    main = [txn for txn in ledger if not txn.is_fixed_fee]

    income = _total(ledger, Direction.INCOME)
    expense = _total(ledger, Direction.EXPENSE)
    taxable_income = _total(main, Direction.INCOME)
    taxable_expense = _total(main, Direction.EXPENSE)

    if primary == Regime.FLAT_REVENUE:
        gross_tax = taxable_income * FLAT_RATE
    elif primary == Regime.REVENUE_MINUS_EXPENSE:
        profit = max(ZERO, taxable_income - taxable_expense)
        # Minimum tax applies even at a loss
        gross_tax = max(profit * PROFIT_RATE, taxable_income * MINIMUM_RATE)
    else:
        gross_tax = ZERO

    return TaxBase(
        income=income,
        expense=expense,
        taxable_income=taxable_income,
        taxable_expense=taxable_expense,
        gross_tax=gross_tax,
    )


def variable_contributions(income: Decimal) -> Decimal:
    """1% of income above the threshold, capped."""
    surplus = max(ZERO, income - VARIABLE_CONTRIBUTION_THRESHOLD)
    return min(surplus * VARIABLE_CONTRIBUTION_RATE, VARIABLE_CONTRIBUTION_CAP)


def mandatory_contributions(income: Decimal) -> Decimal:
    """Fixed plus income-dependent contributions for a year of income."""
    return FIXED_CONTRIBUTIONS + variable_contributions(income)


def compute_net(
    gross_tax: Decimal,
    income: Decimal,
    regime: Union[Regime, RegimeConfig, str],
    has_employees: bool = False,
    contributions: Optional[Decimal] = None,
) -> NetTax:
    """Reduce gross tax by the deductible part of mandatory contributions.

    Only the flat-revenue regime deducts contributions from the tax itself;
    under revenue-minus-expense they are ordinary expenses. Without employees
    the deduction may cover the whole gross tax, with employees at most half.

    Args:
        gross_tax: Unrounded gross tax
        income: Income the variable contributions are computed on
        regime: Primary regime
        has_employees: Whether the business employs staff
        contributions: Contributions actually paid; replaces the statutory
            fixed plus variable estimate when given

    Returns:
        NetTax rounded to whole units, with net_tax + total_deductible == gross_tax
    """
    primary = coerce_regime(regime)

    if contributions is None:
        fixed = FIXED_CONTRIBUTIONS
        variable = variable_contributions(income)
    else:
        fixed = Decimal(contributions)
        variable = ZERO
    total = fixed + variable

    gross = round_money(gross_tax)
    if primary == Regime.FLAT_REVENUE:
        limit = round_money(gross_tax * EMPLOYER_DEDUCTION_CAP) if has_employees else gross
    else:
        limit = ZERO
    deductible = min(round_money(total), limit)

    return NetTax(
        gross_tax=gross,
        fixed_contributions=round_money(fixed),
        variable_contributions=round_money(variable),
        total_contributions=round_money(total),
        deduction_limit=limit,
        total_deductible=deductible,
        net_tax=max(ZERO, gross - deductible),
    )


def load_ratio(net_tax: Decimal, income: Decimal) -> Decimal:
    """Net tax as a percentage of income, to one decimal place."""
    if income <= 0:
        return ZERO.quantize(ONE_DECIMAL)
    return (net_tax / income * 100).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def calculate(
    ledger: Sequence[Transaction],
    config: RegimeConfig,
    contributions: Optional[Decimal] = None,
) -> TaxResult:
    """Compute the full tax picture of a ledger under a regime configuration.

    Raises:
        RegimeConfigurationError: If the configuration is invalid
    """
    base = compute_tax(ledger, config)
    net = compute_net(
        base.gross_tax,
        base.income,
        config.regime,
        has_employees=config.has_employees,
        contributions=contributions,
    )
    return TaxResult(
        income=round_money(base.income),
        expense=round_money(base.expense),
        taxable_income=round_money(base.taxable_income),
        gross_tax=net.gross_tax,
        total_deductible=net.total_deductible,
        net_tax=net.net_tax,
        profit=round_money(base.income - base.expense - net.net_tax),
        load_ratio=load_ratio(net.net_tax, base.income),
    )


def is_load_elevated(result: TaxResult, threshold: Decimal = SAFE_LOAD_THRESHOLD) -> bool:
    """True when the tax load exceeds the safe threshold."""
    return result.load_ratio > threshold
