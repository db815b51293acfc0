"""Shared pytest fixtures for smbtax tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from smbtax.database.factories import create_sqlite_database
from smbtax.domain.entities import Direction, Transaction
from smbtax.domain.ledger import LedgerService
from smbtax.domain.profile import ProfileService

OWN_ACCOUNT = "40802810900000000001"
OWN_INN = "771234567890"
CLIENT_ACCOUNT = "40702810123456789012"
CLIENT_INN = "7701234567"
LANDLORD_ACCOUNT = "40702810555566667777"
LANDLORD_INN = "7709876543"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def profile_service(temp_db):
    """Create a ProfileService with a temporary database."""
    return ProfileService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def _document(
    date: str = "15.01.2026",
    amount: str = "10000,00",
    purpose: str = "Оплата по счету 1",
    payer_account: str = CLIENT_ACCOUNT,
    receiver_account: str = OWN_ACCOUNT,
    payer_inn: str = CLIENT_INN,
    receiver_inn: str = OWN_INN,
    terminated: bool = True,
) -> str:
    lines = [
        "СекцияДокумент=Платежное поручение",
        "Номер=1",
        f"Дата={date}",
        f"Сумма={amount}",
        f"ПлательщикСчет={payer_account}",
        f"ПлательщикИНН={payer_inn}",
        f"ПолучательСчет={receiver_account}",
        f"ПолучательИНН={receiver_inn}",
        f"НазначениеПлатежа={purpose}",
    ]
    if terminated:
        lines.append("КонецДокумента")
    return "\n".join(lines)


def _statement(
    *documents: str, account: str | None = OWN_ACCOUNT, extra_accounts: tuple[str, ...] = ()
) -> str:
    lines = [
        "1CClientBankExchange",
        "ВерсияФормата=1.03",
        "Кодировка=Windows",
        "ДатаНачала=01.01.2026",
        "ДатаКонца=31.12.2026",
    ]
    if account is not None:
        lines += ["СекцияРасчСчет", f"РасчСчет={account}", "КонецРасчСчет"]
    for extra in extra_accounts:
        lines += ["СекцияРасчСчет", f"РасчСчет={extra}", "КонецРасчСчет"]
    lines += list(documents)
    lines.append("КонецФайла")
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_document():
    """Build the text of one payment document block."""
    return _document


@pytest.fixture
def make_statement():
    """Build a statement text from document blocks."""
    return _statement


@pytest.fixture
def sample_statement():
    """Statement with two receipts, one rent payment and one bank fee."""
    return _statement(
        _document(date="15.01.2026", amount="100000,00", purpose="Оплата по договору 7"),
        _document(date="20.02.2026", amount="50000,00", purpose="Оплата по счету 12"),
        _document(
            date="25.01.2026",
            amount="30000,00",
            purpose="Аренда офиса за январь",
            payer_account=OWN_ACCOUNT,
            payer_inn=OWN_INN,
            receiver_account=LANDLORD_ACCOUNT,
            receiver_inn=LANDLORD_INN,
        ),
        _document(
            date="31.01.2026",
            amount="990,00",
            purpose="Комиссия за обслуживание счета",
            payer_account=OWN_ACCOUNT,
            payer_inn=OWN_INN,
            receiver_account="30101810400000000225",
            receiver_inn="7707083893",
        ),
    )


@pytest.fixture
def make_transaction():
    """Build a transaction with sensible defaults."""

    def _make(
        day: date = date(2026, 1, 15),
        amount: str | int = "1000",
        direction: Direction = Direction.INCOME,
        note: str = "Оплата",
        **kwargs,
    ) -> Transaction:
        return Transaction(
            date=day,
            amount=Decimal(str(amount)),
            direction=direction,
            category=kwargs.pop("category", "Продажи" if direction == Direction.INCOME else "Прочее"),
            note=note,
            **kwargs,
        )

    return _make
