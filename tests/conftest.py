"""Pytest configuration and fixtures."""
import os

# Keep test runs off the log file
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from datetime import date
from typing import List, Sequence

from statement_import.config import StatementProfile, ProfileLoader
from statement_import.config.settings import PROFILES_DIR
from statement_import.errors import DecodeError
from statement_import.extractors import BaseDocument, make_fragment
from statement_import.models import PositionedToken, ReconstructedLine


class FakeDocument(BaseDocument):
    """In-memory document: one list of fragments per page."""

    def __init__(self, pages: Sequence[List[dict]], failing_page: int = None):
        super().__init__()
        self.pages = list(pages)
        self.failing_page = failing_page
        self.requested_pages = []
        self.closed = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def get_text_fragments(self, page_number: int) -> List[dict]:
        self.requested_pages.append(page_number)
        if page_number == self.failing_page:
            raise DecodeError(f"Could not read page {page_number}", page_number)
        return self.pages[page_number - 1]

    def close(self) -> None:
        self.closed = True


def build_page(rows: Sequence[Sequence[str]], top: float = 800.0, step: float = 20.0) -> List[dict]:
    """Lay out rows of words top-to-bottom, words 50 units apart."""
    fragments = []
    for row_index, words in enumerate(rows):
        y = top - row_index * step
        for word_index, word in enumerate(words):
            fragments.append(make_fragment(word, 40.0 + word_index * 50.0, y))
    return fragments


def build_lines(*rows: str, page_number: int = 1) -> List[ReconstructedLine]:
    """Build reconstructed lines from whitespace-separated row strings."""
    lines = []
    for row_index, row in enumerate(rows):
        tokens = [
            PositionedToken(text=word, x=40.0 + i * 50.0, y=800.0 - row_index * 20.0)
            for i, word in enumerate(row.split())
        ]
        lines.append(ReconstructedLine(tokens=tokens, page_number=page_number))
    return lines


@pytest.fixture
def today():
    """Fixed processing date."""
    return date(2024, 12, 15)


@pytest.fixture
def profile():
    """Profile with built-in defaults."""
    return StatementProfile({}, "default")


@pytest.fixture
def profile_loader():
    """Loader over the bundled statement profiles."""
    return ProfileLoader(PROFILES_DIR)


@pytest.fixture
def fake_document():
    """Factory for in-memory documents from rows of words per page."""
    def _make(*pages, failing_page=None):
        return FakeDocument([build_page(rows) for rows in pages], failing_page=failing_page)
    return _make


@pytest.fixture
def statement_header():
    """Header rows carrying the statement period."""
    return [
        ["EXTRATO", "CONTA", "CORRENTE"],
        ["PERÍODO:", "01/11/2024", "a", "30/11/2024"],
    ]


@pytest.fixture
def make_lines():
    """Factory for reconstructed lines from row strings."""
    return build_lines
