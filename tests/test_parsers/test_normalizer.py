"""Tests for transaction normalization."""
from datetime import date

import pytest

from statement_import.models import ParsedTransactionCandidate, TransactionType, TransactionStatus
from statement_import.parsers import TransactionNormalizer, finalize_description


def candidate(date_text, description="TARIFA PACOTE", value=5.0,
              type=TransactionType.EXPENSE, is_future=False):
    return ParsedTransactionCandidate(
        date=date_text,
        description=description,
        value=value,
        type=type,
        is_future=is_future,
    )


@pytest.fixture
def normalizer(today):
    return TransactionNormalizer(2024, today=today)


class TestYearCompletion:

    def test_partial_date_gets_statement_year(self, normalizer):
        txn = normalizer.normalize([candidate("14/11")])[0]

        assert txn.iso_date == "2024-11-14"

    def test_own_short_year_kept(self, normalizer):
        txn = normalizer.normalize([candidate("05/01/25")])[0]

        assert txn.date == date(2025, 1, 5)

    def test_invalid_date_skipped(self, normalizer):
        assert normalizer.normalize([candidate("31/02"), candidate("14/11")])[0].iso_date == "2024-11-14"
        assert normalizer.last_rejected == 1

    def test_future_entry_rolls_into_next_year(self, normalizer):
        txn = normalizer.normalize([candidate("05/01", is_future=True)])[0]

        assert txn.date == date(2025, 1, 5)
        assert txn.status is TransactionStatus.PENDING
        assert txn.due_date == date(2025, 1, 5)

    def test_completed_entry_not_rolled(self, normalizer):
        txn = normalizer.normalize([candidate("05/01")])[0]

        assert txn.date == date(2024, 1, 5)

    def test_future_entry_with_explicit_year_not_rolled(self, normalizer):
        txn = normalizer.normalize([candidate("05/01/24", is_future=True)])[0]

        assert txn.date == date(2024, 1, 5)

    def test_december_statement_imported_in_january_rolls(self):
        normalizer = TransactionNormalizer(2024, today=date(2025, 1, 3))

        txn = normalizer.normalize([candidate("05/01", is_future=True)])[0]

        assert txn.iso_date == "2025-01-05"
        assert txn.due_date == date(2025, 1, 5)
        assert txn.status is TransactionStatus.PENDING

    def test_old_statement_not_rolled(self, today):
        txn = TransactionNormalizer(2022, today=today).normalize([candidate("05/01", is_future=True)])[0]

        assert txn.date == date(2022, 1, 5)


class TestStatus:

    def test_past_entry_completed(self, normalizer):
        txn = normalizer.normalize([candidate("14/11")])[0]

        assert txn.status is TransactionStatus.COMPLETED
        assert txn.is_reconciled is True
        assert txn.due_date is None

    def test_date_after_today_pending(self, normalizer):
        txn = normalizer.normalize([candidate("20/12")])[0]

        assert txn.status is TransactionStatus.PENDING
        assert txn.is_reconciled is False
        assert txn.due_date == date(2024, 12, 20)

    def test_future_section_pending(self, normalizer):
        txn = normalizer.normalize([candidate("10/12", is_future=True)])[0]

        assert txn.is_pending


class TestDescription:

    def test_cleanup(self):
        assert finalize_description("  PIX   REC.OUTRA\tIF  ") == "PIX REC.OUTRA IF"

    def test_accents_kept_noise_removed(self):
        assert finalize_description("DEPÓSITO ◆ AGÊNCIA") == "DEPÓSITO AGÊNCIA"

    def test_truncated(self, normalizer):
        txn = normalizer.normalize([candidate("14/11", description="X" * 150)])[0]

        assert len(txn.description) == 100


class TestDeduplication:

    def test_exact_duplicates_collapse(self, normalizer):
        transactions = normalizer.normalize([candidate("10/01"), candidate("10/01")])

        assert len(transactions) == 1
        assert normalizer.last_duplicates_removed == 1

    def test_differences_kept(self, normalizer):
        transactions = normalizer.normalize([
            candidate("10/01"),
            candidate("11/01"),
            candidate("10/01", value=6.0),
            candidate("10/01", type=TransactionType.INCOME),
            candidate("10/01", description="TARIFA AVULSA"),
        ])

        assert len(transactions) == 5

    def test_first_occurrence_wins(self, normalizer):
        transactions = normalizer.normalize([
            candidate("14/11", description="PIX REC"),
            candidate("10/01"),
            candidate("14/11", description="PIX REC"),
        ])

        assert [t.iso_date for t in transactions] == ["2024-11-14", "2024-01-10"]

    def test_idempotent(self, normalizer):
        once = normalizer.normalize([candidate("10/01"), candidate("10/01"), candidate("11/01")])

        twice = normalizer.deduplicate(once)

        assert twice == once
        assert normalizer.last_duplicates_removed == 0
