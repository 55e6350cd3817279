"""Tests for strategy selection."""
import pytest

from statement_import.config import StatementProfile
from statement_import.parsers import TransactionGrammarParser


class TestTransactionGrammarParser:

    def test_supported_strategies(self):
        assert TransactionGrammarParser.get_supported_strategies() == ["auto", "token_stream", "line_regex"]

    def test_unknown_strategy(self, profile):
        with pytest.raises(ValueError, match="Unsupported parsing strategy"):
            TransactionGrammarParser(profile, "ocr")

    def test_explicit_strategy(self, profile, make_lines):
        parser = TransactionGrammarParser(profile, "line_regex")

        candidates = parser.parse(make_lines("14/11 PIX REC.OUTRA IF MT 1,00C"))

        assert parser.selected_strategy == "line_regex"
        assert len(candidates) == 1

    def test_profile_strategy(self, make_lines):
        parser = TransactionGrammarParser(StatementProfile({"strategy": "token_stream"}))

        parser.parse(make_lines("14/11 PIX REC 1,00C"))

        assert parser.selected_strategy == "token_stream"

    def test_auto_tie_prefers_token_stream(self, profile, make_lines):
        parser = TransactionGrammarParser(profile, "auto")

        parser.parse(make_lines("14/11 PIX REC 1,00C"))

        assert parser.selected_strategy == "token_stream"

    def test_auto_picks_token_stream_for_merged_rows(self, profile, make_lines):
        parser = TransactionGrammarParser(profile, "auto")

        candidates = parser.parse(make_lines("14/11 PIX REC 10,00C 15/11 TARIFA 5,00D"))

        assert parser.selected_strategy == "token_stream"
        assert len(candidates) == 2

    def test_auto_picks_line_regex_when_richer(self, profile, make_lines):
        parser = TransactionGrammarParser(profile, "auto")

        candidates = parser.parse(make_lines("14/11 TARIFA PAGAMENTO BOLETO 5,00D"))

        assert parser.selected_strategy == "line_regex"
        assert candidates[0].description == "TARIFA PAGAMENTO BOLETO"
