"""Transaction extraction from statement documents.

Direction and category inference here is best-effort. When neither the
statement owner's account nor the business INN settles the direction, a
keyword heuristic over the payment purpose decides, and it defaults to
income, the common case for a small business that mostly receives sales
payments. It is the most likely source of misclassified rows; users fix
those by hand.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from smbtax.domain.entities import Direction, RegimeTag, Transaction
from smbtax.domain.errors import UnrecognizedFormatError, unrecognized_statement
from smbtax.domain.statement_reader import (
    DOCUMENT_START,
    is_exchange_format,
    read_account_numbers,
    read_documents,
)
from smbtax.utils.amount_parser import parse_amount
from smbtax.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

# Document field names
DATE_FIELD = "Дата"
AMOUNT_FIELD = "Сумма"
PAYER_INN_FIELD = "ПлательщикИНН"
RECEIVER_INN_FIELD = "ПолучательИНН"
PAYER_ACCOUNT_FIELD = "ПлательщикСчет"
RECEIVER_ACCOUNT_FIELD = "ПолучательСчет"
PURPOSE_FIELD = "НазначениеПлатежа"

# Trailing digits compared when account numbers differ in their prefix
ACCOUNT_SUFFIX_LENGTH = 11
MIN_FIXED_FEE_FRAGMENT = 4

EXPENSE_KEYWORDS = ("комиссия", "списание", "покупка", "перевод", "выдача", "перечисление")
INCOME_OVERRIDE_KEYWORDS = ("поступление", "зачисление")

INCOME_CATEGORY = "Продажи"
DEFAULT_CATEGORY = "Прочее"

# Checked in order, first match wins
EXPENSE_CATEGORY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("комиссия", "банк", "обслуж"), "Банк"),
    (("аренд",), "Аренда"),
    (("налог", "взнос", "патент"), "Налоги"),
    (("зарплат", "выплат", "преми"), "Зарплата"),
    (("реклам", "маркетинг", "яндекс", "vk"), "Маркетинг"),
    (("закуп", "товар", "материал"), "Закупка"),
)

# Broader table for suggesting a category on manual entry
SUGGESTION_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("аренда", "rent", "помещение", "офис", "склад"), "Аренда"),
    (("зарплата", "зп", "оклад", "salary", "выплата сотрудник"), "Зарплата"),
    (("реклама", "яндекс", "google", "таргет", "продвижение", "smm"), "Маркетинг"),
    (("закупка", "товар", "материал", "поставщик", "оптовый"), "Закупка"),
    (("налог", "ндс", "усн", "фнс", "страховые", "взнос", "пфр"), "Налоги"),
    (("комиссия", "обслуживание", "банк", "эквайринг", "rko"), "Банк"),
    (("оплата", "поступление", "выручка", "клиент", "покупатель"), INCOME_CATEGORY),
)


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of extracting a whole statement."""

    transactions: list[Transaction]
    documents: int
    skipped: int


def _match_rules(text: str, rules) -> Optional[str]:
    lower = text.lower()
    for keywords, category in rules:
        if any(keyword in lower for keyword in keywords):
            return category
    return None


def suggest_category(note: str) -> str:
    """Suggest a category for a manually entered payment purpose."""
    return _match_rules(note, SUGGESTION_RULES) or DEFAULT_CATEGORY


def categorize(direction: Direction, purpose: str) -> str:
    """Categorize an extracted transaction by direction and payment purpose."""
    if direction == Direction.INCOME:
        return INCOME_CATEGORY
    return _match_rules(purpose, EXPENSE_CATEGORY_RULES) or DEFAULT_CATEGORY


def _direction_by_account(
    fields: Mapping[str, str], own_accounts: Sequence[str]
) -> Optional[Direction]:
    payer = fields.get(PAYER_ACCOUNT_FIELD, "")
    receiver = fields.get(RECEIVER_ACCOUNT_FIELD, "")
    if payer in own_accounts:
        return Direction.EXPENSE
    if receiver in own_accounts:
        return Direction.INCOME

    # Exact matches on any account win over suffix matches
    for account in own_accounts:
        suffix = account[-ACCOUNT_SUFFIX_LENGTH:]
        if payer and payer.endswith(suffix):
            return Direction.EXPENSE
        if receiver and receiver.endswith(suffix):
            return Direction.INCOME
    return None


def _direction_by_keywords(purpose: str) -> Direction:
    lower = purpose.lower()
    if any(word in lower for word in EXPENSE_KEYWORDS) and not any(
        word in lower for word in INCOME_OVERRIDE_KEYWORDS
    ):
        return Direction.EXPENSE
    return Direction.INCOME


def infer_direction(
    fields: Mapping[str, str],
    own_inn: Optional[str] = None,
    own_accounts: Sequence[str] = (),
) -> Direction:
    """Infer whether a document moved money into or out of the business.

    The accounts the statement was issued for are consulted first, then the
    business INN, and the payment purpose keywords only when neither is known.
    """
    if own_accounts:
        direction = _direction_by_account(fields, own_accounts)
        if direction is not None:
            return direction

    if own_inn:
        if fields.get(PAYER_INN_FIELD) == own_inn:
            return Direction.EXPENSE
        if fields.get(RECEIVER_INN_FIELD) == own_inn:
            return Direction.INCOME
        # Neither side carries our INN, keep the sales default
        return Direction.INCOME

    if own_accounts:
        return Direction.INCOME
    return _direction_by_keywords(fields.get(PURPOSE_FIELD, ""))


def matches_fixed_fee_account(account_number: Optional[str], fragment: Optional[str]) -> bool:
    """Return True if an account number carries the fixed-fee account fragment."""
    if not account_number or not fragment:
        return False
    fragment = fragment.strip()
    if len(fragment) < MIN_FIXED_FEE_FRAGMENT:
        return False
    return account_number.endswith(fragment) or fragment in account_number


def extract_transaction(
    fields: Mapping[str, str],
    own_inn: Optional[str] = None,
    fixed_fee_account: Optional[str] = None,
    own_accounts: Sequence[str] = (),
) -> Optional[Transaction]:
    """Build a transaction from one document's fields.

    Args:
        fields: Field map produced by the statement reader
        own_inn: Tax identifier of the business, if known
        fixed_fee_account: Account fragment that marks fixed-fee income
        own_accounts: Account numbers the statement was issued for, if known

    Returns:
        Transaction, or None if the document lacks a valid date or a positive amount
    """
    date_str = fields.get(DATE_FIELD)
    if not date_str:
        logger.debug("Skipping document without date")
        return None
    try:
        txn_date = parse_statement_date(date_str)
    except ValueError as e:
        logger.debug("Skipping document: %s", e)
        return None

    amount_str = fields.get(AMOUNT_FIELD)
    if not amount_str:
        logger.debug("Skipping document dated %s without amount", date_str)
        return None
    try:
        amount = parse_amount(amount_str)
    except ValueError as e:
        logger.debug("Skipping document: %s", e)
        return None
    if amount <= Decimal("0"):
        logger.debug("Skipping document dated %s with non-positive amount %s", date_str, amount)
        return None

    purpose = fields.get(PURPOSE_FIELD, "")
    direction = infer_direction(fields, own_inn=own_inn, own_accounts=own_accounts)

    if direction == Direction.INCOME:
        account_number = fields.get(RECEIVER_ACCOUNT_FIELD) or None
    else:
        account_number = fields.get(PAYER_ACCOUNT_FIELD) or None

    regime_tag = None
    if direction == Direction.INCOME and matches_fixed_fee_account(account_number, fixed_fee_account):
        regime_tag = RegimeTag.FIXED_FEE

    return Transaction(
        date=txn_date,
        amount=amount,
        direction=direction,
        category=categorize(direction, purpose),
        note=purpose,
        account_number=account_number,
        regime_tag=regime_tag,
    )


def extract_transactions(
    text: str,
    own_inn: Optional[str] = None,
    fixed_fee_account: Optional[str] = None,
) -> ExtractionResult:
    """Extract every valid transaction from a decoded statement.

    Args:
        text: Full decoded statement text
        own_inn: Tax identifier of the business, if known
        fixed_fee_account: Account fragment that marks fixed-fee income

    Returns:
        ExtractionResult with the transactions in file order

    Raises:
        UnrecognizedFormatError: If the text carries neither the format
            signature nor a single document block
    """
    if not is_exchange_format(text) and DOCUMENT_START not in text:
        raise UnrecognizedFormatError(unrecognized_statement())

    own_accounts = read_account_numbers(text)

    transactions = []
    documents = 0
    for fields in read_documents(text):
        documents += 1
        txn = extract_transaction(
            fields,
            own_inn=own_inn,
            fixed_fee_account=fixed_fee_account,
            own_accounts=own_accounts,
        )
        if txn is not None:
            transactions.append(txn)

    skipped = documents - len(transactions)
    logger.info(
        "Extracted %d transactions from %d documents (%d skipped)",
        len(transactions),
        documents,
        skipped,
    )
    return ExtractionResult(transactions=transactions, documents=documents, skipped=skipped)
