"""Tests for the ledger service."""

from datetime import date
from decimal import Decimal

import pytest

from smbtax.domain.entities import Direction, Regime, RegimeConfig, RegimeTag
from smbtax.domain.errors import NotFoundError, UnrecognizedFormatError, ValidationError
from smbtax.domain.calendar import DeadlineKind
from smbtax.domain.reconciliation import ImportStrategy


class TestImportStatement:
    def test_first_import_commits(self, ledger_service, sample_statement):
        report = ledger_service.import_statement(sample_statement)

        assert report.committed
        assert report.extraction.documents == 4
        ledger = ledger_service.get_ledger()
        assert len(ledger) == 4
        assert ledger[0].date == date(2026, 2, 20)

    def test_second_import_needs_strategy(self, ledger_service, sample_statement):
        ledger_service.import_statement(sample_statement)
        before = ledger_service.get_ledger()

        report = ledger_service.import_statement(sample_statement)

        assert not report.committed
        assert report.reconciliation.preview.existing_count == 4
        assert ledger_service.get_ledger() == before

    def test_merge_skips_duplicates(self, ledger_service, sample_statement):
        ledger_service.import_statement(sample_statement)

        report = ledger_service.import_statement(sample_statement, ImportStrategy.MERGE)

        assert report.reconciliation.added == 0
        assert report.reconciliation.skipped == 4
        assert len(ledger_service.get_ledger()) == 4

    def test_merge_is_idempotent_for_sub_cent_amounts(
        self, ledger_service, make_statement, make_document
    ):
        text = make_statement(make_document(amount="1 000,005"))
        ledger_service.import_statement(text)

        report = ledger_service.import_statement(text, ImportStrategy.MERGE)

        assert report.reconciliation.skipped == 1
        (txn,) = ledger_service.get_ledger()
        assert txn.amount == Decimal("1000.01")

    def test_replace_discards_manual_entries(self, ledger_service, sample_statement):
        ledger_service.add_transaction(date(2026, 3, 1), Decimal("1"), Direction.INCOME)

        ledger_service.import_statement(sample_statement, ImportStrategy.REPLACE)

        assert len(ledger_service.get_ledger()) == 4

    def test_uses_profile_inn(self, ledger_service, temp_db, make_statement, make_document):
        temp_db.save_profile(RegimeConfig(inn="500100732259"))
        text = make_statement(
            make_document(
                purpose="Оплата по счету",
                payer_account="40702810000000000111",
                payer_inn="500100732259",
                receiver_account="40702810000000000222",
            ),
            account=None,
        )

        ledger_service.import_statement(text)

        (txn,) = ledger_service.get_ledger()
        assert txn.direction == Direction.EXPENSE

    def test_tags_fixed_fee_income(self, ledger_service, temp_db, make_statement, make_document):
        temp_db.save_profile(RegimeConfig(has_fixed_fee_addon=True, fixed_fee_account="0042"))
        text = make_statement(
            make_document(receiver_account="40802810900000000042"),
            account="40802810900000000042",
        )

        ledger_service.import_statement(text)

        (txn,) = ledger_service.get_ledger()
        assert txn.regime_tag == RegimeTag.FIXED_FEE

    def test_unrecognized_text(self, ledger_service):
        with pytest.raises(UnrecognizedFormatError):
            ledger_service.import_statement("Date,Amount\n2026-01-15,100\n")

    def test_statement_without_valid_documents(self, ledger_service, make_statement, make_document):
        ledger_service.add_transaction(date(2026, 1, 1), Decimal("100"), Direction.INCOME)
        text = make_statement(make_document(date="bad"))

        with pytest.raises(ValidationError):
            ledger_service.import_statement(text, ImportStrategy.REPLACE)

        assert len(ledger_service.get_ledger()) == 1


class TestTransactions:
    def test_add_suggests_category(self, ledger_service):
        txn = ledger_service.add_transaction(
            date(2026, 1, 15), Decimal("30000"), Direction.EXPENSE, note="Аренда офиса"
        )

        assert txn.category == "Аренда"
        assert ledger_service.get_transaction(txn.id) == txn

    def test_add_rounds_to_cents(self, ledger_service):
        txn = ledger_service.add_transaction(date(2026, 1, 15), Decimal("10.005"), Direction.INCOME)

        assert txn.amount == Decimal("10.01")
        assert ledger_service.get_transaction(txn.id) == txn

    def test_add_keeps_explicit_category(self, ledger_service):
        txn = ledger_service.add_transaction(
            date(2026, 1, 15), Decimal("100"), Direction.EXPENSE, category="Связь", note="Аренда"
        )
        assert txn.category == "Связь"

    def test_add_rejects_non_positive_amount(self, ledger_service):
        with pytest.raises(ValidationError):
            ledger_service.add_transaction(date(2026, 1, 15), Decimal("0"), Direction.INCOME)

    def test_add_auto_tags_fixed_fee(self, ledger_service, temp_db):
        temp_db.save_profile(RegimeConfig(has_fixed_fee_addon=True, fixed_fee_account="0042"))

        tagged = ledger_service.add_transaction(
            date(2026, 1, 15),
            Decimal("100"),
            Direction.INCOME,
            account_number="40802810900000000042",
        )
        untagged = ledger_service.add_transaction(
            date(2026, 1, 15),
            Decimal("100"),
            Direction.EXPENSE,
            account_number="40802810900000000042",
        )

        assert tagged.is_fixed_fee
        assert not untagged.is_fixed_fee

    def test_add_explicit_fixed_fee(self, ledger_service):
        txn = ledger_service.add_transaction(
            date(2026, 1, 15), Decimal("100"), Direction.INCOME, fixed_fee=True
        )
        assert txn.is_fixed_fee

    def test_update_only_given_fields(self, ledger_service):
        txn = ledger_service.add_transaction(
            date(2026, 1, 15), Decimal("100"), Direction.INCOME, note="Оплата"
        )

        updated = ledger_service.update_transaction(txn.id, amount=Decimal("150"))

        assert updated.amount == Decimal("150")
        assert updated.note == "Оплата"
        assert ledger_service.get_transaction(txn.id).amount == Decimal("150")

    def test_update_missing(self, ledger_service):
        with pytest.raises(NotFoundError):
            ledger_service.update_transaction("missing", amount=Decimal("1"))

    def test_toggle_fixed_fee(self, ledger_service):
        txn = ledger_service.add_transaction(date(2026, 1, 15), Decimal("100"), Direction.INCOME)

        assert ledger_service.toggle_fixed_fee(txn.id).is_fixed_fee
        assert not ledger_service.toggle_fixed_fee(txn.id).is_fixed_fee

    def test_delete(self, ledger_service):
        txn = ledger_service.add_transaction(date(2026, 1, 15), Decimal("100"), Direction.INCOME)

        ledger_service.delete_transaction(txn.id)

        assert ledger_service.get_transaction(txn.id) is None
        with pytest.raises(NotFoundError):
            ledger_service.delete_transaction(txn.id)


class TestTaxViews:
    def test_tax_result(self, ledger_service, sample_statement):
        ledger_service.import_statement(sample_statement)

        result = ledger_service.get_tax_result()

        assert result.income == Decimal("150000")
        assert result.gross_tax == Decimal("9000")
        # Statutory contributions cover the whole tax
        assert result.net_tax == Decimal("0")

    def test_tax_result_date_range(self, ledger_service, sample_statement, temp_db):
        temp_db.save_profile(RegimeConfig(regime=Regime.REVENUE_MINUS_EXPENSE))
        ledger_service.import_statement(sample_statement)

        result = ledger_service.get_tax_result(
            start_date=date(2026, 1, 1), end_date=date(2026, 1, 31)
        )

        assert result.income == Decimal("100000")
        assert result.expense == Decimal("30990")
        # (100 000 - 30 990) * 15% = 10 351.5
        assert result.net_tax == Decimal("10352")

    def test_calendar(self, ledger_service, sample_statement):
        ledger_service.import_statement(sample_statement)

        obligations = ledger_service.get_calendar(today=date(2026, 2, 25))

        current = [
            obligation
            for obligation in obligations
            if obligation.is_current and obligation.deadline.kind == DeadlineKind.ADVANCE
        ]
        assert [(o.deadline.year, o.deadline.quarter) for o in current] == [(2025, 4)]

    def test_calendar_overdue_advance(self, ledger_service, sample_statement):
        ledger_service.import_statement(sample_statement)

        obligations = ledger_service.get_calendar(today=date(2026, 5, 4))

        overdue = [obligation for obligation in obligations if obligation.overdue]
        assert [o.deadline.label for o in overdue] == ["Аванс УСН Q1 2026"]
