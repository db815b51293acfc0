"""Reader for the 1C client-bank exchange text format.

The format is line oriented. Payment documents sit between a
``СекцияДокумент=...`` line and a ``КонецДокумента`` line, and every line in
between is a ``Key=Value`` pair. Account header sections use the same layout
between ``СекцияРасчСчет`` and ``КонецРасчСчет``.

Example::

    1CClientBankExchange
    Кодировка=Windows
    СекцияРасчСчет
    РасчСчет=40802810900000000001
    КонецРасчСчет
    СекцияДокумент=Платежное поручение
    Дата=15.01.2026
    Сумма=15000,00
    НазначениеПлатежа=Оплата по счету 12
    КонецДокумента
    КонецФайла
"""

import logging
from enum import Enum
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

FORMAT_SIGNATURE = "1CClientBankExchange"
DOCUMENT_START = "СекцияДокумент"
DOCUMENT_END = "КонецДокумента"
ACCOUNT_SECTION_START = "СекцияРасчСчет"
ACCOUNT_SECTION_END = "КонецРасчСчет"
ACCOUNT_FIELD = "РасчСчет"


class ReaderState(Enum):
    """Scanner position relative to a section block."""

    OUTSIDE_DOCUMENT = "outside"
    INSIDE_DOCUMENT = "inside"


def split_field(line: str) -> Optional[tuple[str, str]]:
    """Split a ``Key=Value`` line on its first ``=``.

    Returns None for lines that carry no ``=`` or an empty key.
    """
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip()


def _read_sections(text: str, start: str, end: str) -> Iterator[dict[str, str]]:
    """Yield the field maps of every complete ``start``..``end`` block.

    A block is committed only when its end marker is reached. A block that is
    interrupted by another start marker, or by the end of input, is discarded.
    """
    state = ReaderState.OUTSIDE_DOCUMENT
    fields: dict[str, str] = {}

    for line_num, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith(start):
            if state is ReaderState.INSIDE_DOCUMENT:
                logger.debug("Discarding unterminated %s block before line %d", start, line_num)
            state = ReaderState.INSIDE_DOCUMENT
            fields = {}
            continue

        if state is ReaderState.OUTSIDE_DOCUMENT:
            continue

        if line.startswith(end):
            yield fields
            state = ReaderState.OUTSIDE_DOCUMENT
            fields = {}
            continue

        pair = split_field(line)
        if pair is not None:
            key, value = pair
            fields[key] = value

    if state is ReaderState.INSIDE_DOCUMENT:
        logger.debug("Discarding %s block truncated at end of input", start)


def read_documents(text: str) -> Iterator[dict[str, str]]:
    """Lazily yield the field map of every complete payment document.

    Args:
        text: Full decoded statement text

    Yields:
        Mapping of field name to raw string value, one per document
    """
    return _read_sections(text, DOCUMENT_START, DOCUMENT_END)


def read_account_numbers(text: str) -> list[str]:
    """Return the account numbers listed in the statement header sections.

    The first entry is the account the statement was issued for.
    """
    accounts = []
    for section in _read_sections(text, ACCOUNT_SECTION_START, ACCOUNT_SECTION_END):
        account = section.get(ACCOUNT_FIELD)
        if account:
            accounts.append(account)
    return accounts


def is_exchange_format(text: str) -> bool:
    """Return True if the text carries the exchange format signature."""
    return FORMAT_SIGNATURE in text
