"""Tests for the exchange format reader."""

from collections.abc import Iterator

from smbtax.domain.statement_reader import (
    is_exchange_format,
    read_account_numbers,
    read_documents,
    split_field,
)


def test_reads_every_complete_document(make_statement, make_document):
    text = make_statement(
        make_document(date="15.01.2026", amount="100,00"),
        make_document(date="16.01.2026", amount="200,00"),
    )

    documents = list(read_documents(text))

    assert len(documents) == 2
    assert documents[0]["Дата"] == "15.01.2026"
    assert documents[1]["Сумма"] == "200,00"


def test_reader_is_lazy(sample_statement):
    assert isinstance(read_documents(sample_statement), Iterator)


def test_header_fields_stay_out_of_documents(sample_statement):
    for fields in read_documents(sample_statement):
        assert "ВерсияФормата" not in fields
        assert "ДатаНачала" not in fields


def test_value_keeps_later_equals_signs(make_statement, make_document):
    text = make_statement(make_document(purpose="Оплата по счету №5 (ставка=0%)"))

    (fields,) = read_documents(text)

    assert fields["НазначениеПлатежа"] == "Оплата по счету №5 (ставка=0%)"


def test_truncated_document_is_discarded(make_statement, make_document):
    text = make_statement(
        make_document(date="15.01.2026"),
        make_document(date="16.01.2026", terminated=False),
    )

    documents = list(read_documents(text))

    assert [fields["Дата"] for fields in documents] == ["15.01.2026"]


def test_document_interrupted_by_next_start_is_discarded(make_statement, make_document):
    text = make_statement(
        make_document(date="15.01.2026", terminated=False),
        make_document(date="16.01.2026"),
    )

    documents = list(read_documents(text))

    assert [fields["Дата"] for fields in documents] == ["16.01.2026"]


def test_crlf_line_endings(make_statement, make_document):
    text = make_statement(make_document(amount="500,00")).replace("\n", "\r\n")

    (fields,) = read_documents(text)

    assert fields["Сумма"] == "500,00"


def test_empty_text_has_no_documents():
    assert list(read_documents("")) == []


def test_lines_without_equals_are_ignored():
    text = "СекцияДокумент=Платежное поручение\nмусор\nДата=15.01.2026\nКонецДокумента\n"

    (fields,) = read_documents(text)

    assert fields == {"Дата": "15.01.2026"}


def test_split_field():
    assert split_field("Сумма=100,00") == ("Сумма", "100,00")
    assert split_field("Пусто=") == ("Пусто", "")
    assert split_field("=значение") is None
    assert split_field("КонецФайла") is None


def test_read_account_numbers(sample_statement):
    assert read_account_numbers(sample_statement) == ["40802810900000000001"]


def test_read_account_numbers_without_header(make_statement, make_document):
    text = make_statement(make_document(), account=None)
    assert read_account_numbers(text) == []


def test_is_exchange_format(sample_statement):
    assert is_exchange_format(sample_statement)
    assert not is_exchange_format("Date,Amount\n2026-01-15,100\n")
