"""Tests for fragment to token extraction."""
import math
from types import SimpleNamespace

from statement_import.extractors import extract_tokens, make_fragment


class TestExtractTokens:

    def test_position_from_transform(self):
        tokens = extract_tokens([make_fragment("14/11", 32.0, 712.5)])

        assert len(tokens) == 1
        assert tokens[0].text == "14/11"
        assert (tokens[0].x, tokens[0].y) == (32.0, 712.5)

    def test_non_breaking_space_and_trim(self):
        tokens = extract_tokens([{"text": "\u00a0PIX\u00a0REC ", "transform": [1, 0, 0, 1, 10, 20]}])

        assert tokens[0].text == "PIX REC"

    def test_empty_fragments_dropped(self):
        fragments = [
            make_fragment("   ", 0, 0),
            make_fragment("\u00a0", 0, 0),
            {"text": None, "transform": [1, 0, 0, 1, 0, 0]},
            make_fragment("TARIFA", 5, 5),
        ]

        assert [t.text for t in extract_tokens(fragments)] == ["TARIFA"]

    def test_invalid_transform_defaults_to_origin(self):
        fragments = [
            {"text": "A"},
            {"text": "B", "transform": [1, 0, 0, 1]},
            {"text": "C", "transform": [1, 0, 0, 1, "x", 4]},
            {"text": "D", "transform": [1, 0, 0, 1, math.nan, 4]},
        ]

        assert [(t.x, t.y) for t in extract_tokens(fragments)] == [(0.0, 0.0)] * 4

    def test_object_fragments(self):
        """pdf.js-like items expose ``str`` instead of ``text``."""
        item = SimpleNamespace(str="1,00C", transform=(1, 0, 0, 1, 500, 700))

        tokens = extract_tokens([item])

        assert tokens[0].text == "1,00C"
        assert tokens[0].x == 500.0

    def test_order_preserved(self):
        fragments = [make_fragment("B", 100, 10), make_fragment("A", 0, 10)]

        assert [t.text for t in extract_tokens(fragments)] == ["B", "A"]

    def test_none_input(self):
        assert extract_tokens(None) == []
