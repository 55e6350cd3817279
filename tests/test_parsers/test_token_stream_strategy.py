"""Tests for the token-stream transaction grammar."""
import pytest

from statement_import.config import StatementProfile
from statement_import.models import TransactionType
from statement_import.parsers import TokenStreamStrategy


@pytest.fixture
def strategy(profile):
    return TokenStreamStrategy(profile)


class TestTokenStreamStrategy:

    def test_credit_row(self, strategy, make_lines):
        candidates = strategy.parse(make_lines("14/11 PIX REC.OUTRA IF MT 1,00C"))

        assert len(candidates) == 1
        c = candidates[0]
        assert (c.date, c.description, c.value) == ("14/11", "PIX REC.OUTRA IF MT", 1.0)
        assert c.type is TransactionType.INCOME

    def test_separate_suffix_token(self, strategy, make_lines):
        c = strategy.parse(make_lines("08/12 PIX EMIT.OUTRA IF 124,37 D"))[0]

        assert c.suffix == "D"
        assert c.value == 124.37
        assert c.type is TransactionType.EXPENSE

    def test_suffixed_value_preferred_over_balance(self, strategy, make_lines):
        c = strategy.parse(make_lines("05/11 TARIFA PACOTE 1.200,00 35,90 D"))[0]

        assert c.value == 35.90
        assert c.suffix == "D"

    def test_balance_after_value(self, strategy, make_lines):
        c = strategy.parse(make_lines("05/11 TARIFA PACOTE 35,90D 1.200,00"))[0]

        assert c.value == 35.90

    def test_merged_rows_still_split(self, strategy, make_lines):
        """Two transactions clustered into one visual row."""
        candidates = strategy.parse(make_lines("14/11 PIX REC 10,00C 15/11 TARIFA 5,00D"))

        assert [(c.date, c.description, c.value) for c in candidates] == [
            ("14/11", "PIX REC", 10.0),
            ("15/11", "TARIFA", 5.0),
        ]

    def test_wrapped_description(self, strategy, make_lines):
        candidates = strategy.parse(make_lines(
            "14/11 PIX REC.OUTRA",
            "FULANO DE TAL 50,00 C",
        ))

        assert candidates[0].description == "PIX REC.OUTRA FULANO DE TAL"
        assert candidates[0].type is TransactionType.INCOME

    def test_detail_row_after_value_ignored(self, strategy, make_lines):
        candidates = strategy.parse(make_lines(
            "14/11 PIX REC.OUTRA 10,00C",
            "RECEBIMENTO PIX FULANO",
            "DOC.: 123456",
        ))

        assert len(candidates) == 1
        assert candidates[0].description == "PIX REC.OUTRA"

    def test_detail_row_drops_candidate_without_value(self, strategy, make_lines):
        candidates = strategy.parse(make_lines(
            "14/11 PIX REC.OUTRA",
            "RECEBIMENTO PIX",
            "15/11 TARIFA 5,00D",
        ))

        assert [c.date for c in candidates] == ["15/11"]

    def test_detail_stop_needs_word_boundary(self, strategy, make_lines):
        c = strategy.parse(make_lines("14/11 TED DOCUMENTO 5,00D"))[0]

        assert c.description == "TED DOCUMENTO"

    def test_skip_row_emits_waiting_candidate(self, strategy, make_lines):
        candidates = strategy.parse(make_lines(
            "14/11 PIX REC 10,00",
            "SALDO DO DIA 1.210,00",
        ))

        assert len(candidates) == 1
        assert candidates[0].type is TransactionType.INCOME

    @pytest.mark.parametrize("row", [
        "SALDO DO DIA 1.200,00",
        "14/11 SALDO ANTERIOR 100,00 C",
        "14/11 DESBLOQUEIO JUDICIAL 100,00C",
        "14/11 TRANSF CONSALDO 50,00 D",
        "14/11 SOBRELIMITE TARIFA 12,00D",
        "1.200,00",
    ])
    def test_nothing_emitted(self, strategy, make_lines, row):
        assert strategy.parse(make_lines(row)) == []

    def test_future_section_spans_pages(self, strategy, make_lines):
        lines = make_lines("14/11 PIX REC 1,00C", "LANCAMENTOS FUTUROS", page_number=1)
        lines += make_lines("20/12 BOLETO ENERGIA 150,00D", page_number=2)

        candidates = strategy.parse(lines)

        assert [c.is_future for c in candidates] == [False, True]
        assert candidates[1].page_number == 2

    def test_keyword_type_when_no_suffix(self, strategy, make_lines):
        candidates = strategy.parse(make_lines(
            "10/11 PIX ENV FULANO 30,00",
            "11/11 TRANSF REC CICLANO 40,00",
        ))

        assert [c.type for c in candidates] == [TransactionType.EXPENSE, TransactionType.INCOME]

    def test_ambiguous_type_uses_profile_default(self, make_lines):
        strategy = TokenStreamStrategy(StatementProfile({"default_type": "income"}))

        c = strategy.parse(make_lines("10/11 COMPRA MERCADO 30,00"))[0]

        assert c.type is TransactionType.INCOME

    def test_ambiguous_type_defaults_to_expense(self, strategy, make_lines, caplog):
        c = strategy.parse(make_lines("10/11 COMPRA MERCADO 30,00"))[0]

        assert c.type is TransactionType.EXPENSE
        assert "Ambiguous type" in caplog.text
