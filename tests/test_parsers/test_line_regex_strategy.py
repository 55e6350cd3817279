"""Tests for the line-regex transaction grammar."""
import pytest

from statement_import.config import StatementProfile
from statement_import.models import TransactionType
from statement_import.parsers import LineRegexStrategy


@pytest.fixture
def strategy(profile):
    return LineRegexStrategy(profile)


class TestLineRegexStrategy:

    def test_credit_row(self, strategy, make_lines):
        candidates = strategy.parse(make_lines("14/11 PIX REC.OUTRA IF MT 1,00C"))

        assert len(candidates) == 1
        c = candidates[0]
        assert c.date == "14/11"
        assert c.description == "PIX REC.OUTRA IF MT"
        assert c.value == 1.00
        assert c.type is TransactionType.INCOME
        assert c.suffix == "C"
        assert c.is_future is False

    def test_debit_row(self, strategy, make_lines):
        c = strategy.parse(make_lines("08/12 PIX EMIT.OUTRA IF 124,37D"))[0]

        assert c.value == 124.37
        assert c.type is TransactionType.EXPENSE

    def test_spaced_suffix(self, strategy, make_lines):
        c = strategy.parse(make_lines("08/12 PIX EMIT.OUTRA IF 124,37 D"))[0]

        assert c.suffix == "D"
        assert c.description == "PIX EMIT.OUTRA IF"

    def test_suffixed_value_preferred_over_balance(self, strategy, make_lines):
        c = strategy.parse(make_lines("05/11 TARIFA PACOTE 1.200,00 35,90D"))[0]

        assert c.value == 35.90
        assert c.type is TransactionType.EXPENSE

    def test_first_value_without_suffix(self, strategy, make_lines):
        c = strategy.parse(make_lines("05/11 TARIFA PACOTE 35,90 1.200,00"))[0]

        assert c.value == 35.90
        assert c.suffix is None
        assert c.type is TransactionType.EXPENSE

    def test_suffix_beats_keywords(self, strategy, make_lines):
        c = strategy.parse(make_lines("05/11 PIX EMIT.OUTRA IF 10,00C"))[0]

        assert c.type is TransactionType.INCOME

    def test_date_with_year(self, strategy, make_lines):
        c = strategy.parse(make_lines("05/01/25 DEP DINHEIRO 300,00C"))[0]

        assert c.date == "05/01/25"
        assert c.has_explicit_year

    def test_wrapped_description(self, strategy, make_lines):
        candidates = strategy.parse(make_lines(
            "14/11 PIX REC.OUTRA",
            "FULANO DE TAL 50,00C",
        ))

        assert len(candidates) == 1
        assert candidates[0].description == "PIX REC.OUTRA FULANO DE TAL"
        assert candidates[0].value == 50.0

    def test_new_date_drops_pending_row(self, strategy, make_lines):
        candidates = strategy.parse(make_lines(
            "14/11 PIX REC.OUTRA",
            "15/11 TARIFA 5,00D",
        ))

        assert [c.date for c in candidates] == ["15/11"]

    @pytest.mark.parametrize("row", [
        "SALDO DO DIA 1.200,00",
        "14/11 SALDO ANTERIOR 100,00C",
        "LIMITE CHEQUE ESPECIAL 500,00",
        "SALDO BLOQ. 0,00",
        "14/11 DESBLOQUEIO JUDICIAL 100,00C",
        "14/11 TRANSF CONSALDO 50,00D",
        "14/11 SOBRELIMITE TARIFA 12,00D",
    ])
    def test_skip_rows(self, strategy, make_lines, row):
        assert strategy.parse(make_lines(row)) == []

    def test_undated_rows_ignored(self, strategy, make_lines):
        assert strategy.parse(make_lines("PIX REC.OUTRA 1,00C", "1.200,00")) == []

    def test_short_description_rejected(self, strategy, make_lines):
        assert strategy.parse(make_lines("14/11 AB 1,00C")) == []

    def test_future_section(self, strategy, make_lines):
        candidates = strategy.parse(make_lines(
            "14/11 PIX REC 1,00C",
            "LANÇAMENTOS FUTUROS",
            "20/12 BOLETO ENERGIA 150,00D",
            "SALDO PREVISTO 1.000,00",
            "05/01 TARIFA PACOTE 35,90D",
        ))

        assert [c.is_future for c in candidates] == [False, True, True]

    def test_continuation_limit(self, make_lines):
        strategy = LineRegexStrategy(StatementProfile({"max_continuation_chars": 20}))

        candidates = strategy.parse(make_lines(
            "14/11 PIX REC.OUTRA",
            "FULANO DE TAL DA SILVA",
            "CPF 000 50,00C",
        ))

        assert candidates == []
