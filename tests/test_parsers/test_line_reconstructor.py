"""Tests for visual row reconstruction."""
import pytest

from statement_import.models import PositionedToken
from statement_import.parsers import LineReconstructor


def token(text, x, y):
    return PositionedToken(text=text, x=x, y=y)


class TestLineReconstructor:

    def test_tokens_within_tolerance_share_a_row(self):
        tokens = [token("1,00C", 500, 699.0), token("14/11", 40, 700.0), token("PIX", 90, 701.5)]

        lines = LineReconstructor(y_tolerance=2).reconstruct(tokens)

        assert len(lines) == 1
        assert lines[0].text == "14/11 PIX 1,00C"

    def test_rows_ordered_top_to_bottom(self):
        tokens = [
            token("08/12", 40, 650),
            token("14/11", 40, 700),
            token("EXTRATO", 40, 780),
        ]

        lines = LineReconstructor(y_tolerance=2).reconstruct(tokens, page_number=3)

        assert [line.text for line in lines] == ["EXTRATO", "14/11", "08/12"]
        assert all(line.page_number == 3 for line in lines)

    def test_row_reference_is_first_token(self):
        """Drift is measured against the row's first token, not chained."""
        tokens = [token("A", 0, 700), token("B", 10, 698.5), token("C", 20, 697)]

        lines = LineReconstructor(y_tolerance=2).reconstruct(tokens)

        assert [line.text for line in lines] == ["A B", "C"]

    def test_zero_tolerance_splits_offsets(self):
        tokens = [token("14/11", 40, 700.0), token("PIX", 90, 699.5)]

        assert len(LineReconstructor(y_tolerance=0).reconstruct(tokens)) == 2

    def test_every_token_lands_in_one_row(self):
        tokens = [token(str(i), i * 7 % 13, 700 - i * 1.3) for i in range(20)]

        lines = LineReconstructor(y_tolerance=3).reconstruct(tokens)

        assert sum(len(line.tokens) for line in lines) == 20
        for line in lines:
            xs = [t.x for t in line.tokens]
            assert xs == sorted(xs)

    def test_empty_page(self):
        assert LineReconstructor().reconstruct([]) == []

    def test_negative_tolerance(self):
        with pytest.raises(ValueError):
            LineReconstructor(y_tolerance=-1)
