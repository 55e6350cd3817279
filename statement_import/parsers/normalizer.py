"""Turn parsed candidates into final, de-duplicated transactions."""

import logging
import re
from datetime import date
from typing import Iterable, List, Optional

from ..models import (
    NormalizedTransaction,
    ParsedTransactionCandidate,
    TransactionStatus,
)
from ..utils import complete_partial_date, add_one_year

logger = logging.getLogger(__name__)

# Anything that is not a letter (accents included), digit, space or common punctuation
DESCRIPTION_NOISE_RE = re.compile(r"[^\w\s.,\-/*&()'#:+]")

MAX_DESCRIPTION_LENGTH = 100


def finalize_description(description: str, max_length: int = MAX_DESCRIPTION_LENGTH) -> str:
    """
    Clean a description for storage.

    Collapses whitespace, strips noise characters (keeping Portuguese accented
    letters) and truncates.

    Example:
        >>> finalize_description("PIX  REC.OUTRA IF MT ▪")
        'PIX REC.OUTRA IF MT'
    """
    cleaned = DESCRIPTION_NOISE_RE.sub(' ', description or '')
    cleaned = ' '.join(cleaned.split())
    return cleaned[:max_length].strip()


def derive_status(transaction_date: Optional[date], is_future: bool, today: date) -> TransactionStatus:
    """Pending when flagged future or dated strictly after today."""
    if is_future or (transaction_date is not None and transaction_date > today):
        return TransactionStatus.PENDING
    return TransactionStatus.COMPLETED


class TransactionNormalizer:
    """
    Normalize candidates in four ordered steps.

    1. Year completion (DD/MM -> statement year, DD/MM/YY -> 20YY)
    2. Description finalize
    3. Status derivation (pending/completed, due date, reconciled flag)
    4. Deduplication on (date, description, value, type), first wins

    Dedup runs after year completion; deduplicating raw DD/MM would merge
    rows of different years.
    """

    def __init__(
        self,
        statement_year: int,
        today: Optional[date] = None,
        max_description_length: int = MAX_DESCRIPTION_LENGTH
    ):
        """
        Args:
            statement_year: Reference year from StatementYearResolver
            today: Processing date (defaults to date.today())
            max_description_length: Description truncation length
        """
        self.statement_year = statement_year
        self.today = today or date.today()
        self.max_description_length = max_description_length
        self.last_duplicates_removed = 0
        self.last_rejected = 0

    def normalize(self, candidates: Iterable[ParsedTransactionCandidate]) -> List[NormalizedTransaction]:
        """
        Normalize and de-duplicate candidates.

        Args:
            candidates: Candidates in document order

        Returns:
            List of NormalizedTransaction
        """
        normalized = []
        self.last_rejected = 0

        for candidate in candidates:
            transaction = self._normalize_one(candidate)
            if transaction is None:
                self.last_rejected += 1
                continue
            normalized.append(transaction)

        return self.deduplicate(normalized)

    def _normalize_one(self, candidate: ParsedTransactionCandidate) -> Optional[NormalizedTransaction]:
        transaction_date = self._complete_date(candidate)
        if transaction_date is None:
            logger.warning(f"Skipping '{candidate.raw_text or candidate.description}': invalid date {candidate.date}")
            return None

        description = finalize_description(candidate.description, self.max_description_length)
        if not description:
            logger.debug(f"Skipping candidate with empty description: {candidate.raw_text}")
            return None

        if candidate.value <= 0:
            logger.debug(f"Skipping candidate with non-positive value: {candidate.raw_text}")
            return None

        status = derive_status(transaction_date, candidate.is_future, self.today)
        pending = status is TransactionStatus.PENDING

        return NormalizedTransaction(
            date=transaction_date,
            description=description,
            value=round(candidate.value, 2),
            type=candidate.type,
            status=status,
            due_date=transaction_date if pending else None,
            is_reconciled=not pending,
        )

    def _complete_date(self, candidate: ParsedTransactionCandidate) -> Optional[date]:
        transaction_date = complete_partial_date(candidate.date, self.statement_year)
        if transaction_date is None:
            return None

        # Scheduled entries listed near year-end that fall "before today" belong to next year.
        # A December statement imported in January is one year behind today.
        if (
            candidate.is_future
            and not candidate.has_explicit_year
            and self.statement_year >= self.today.year - 1
            and transaction_date < self.today
        ):
            rolled = add_one_year(transaction_date)
            logger.debug(f"Future entry {candidate.date} rolled forward to {rolled.isoformat()}")
            return rolled

        return transaction_date

    def deduplicate(self, transactions: Iterable[NormalizedTransaction]) -> List[NormalizedTransaction]:
        """
        Drop repeated transactions, keeping the first occurrence.

        Idempotent: running it over its own output removes nothing.
        """
        transactions = list(transactions)
        seen = set()
        unique = []
        for transaction in transactions:
            key = transaction.dedup_key()
            if key in seen:
                logger.debug(f"Duplicate dropped: {transaction.iso_date} {transaction.description} {transaction.value:.2f}")
                continue
            seen.add(key)
            unique.append(transaction)

        self.last_duplicates_removed = len(transactions) - len(unique)
        if self.last_duplicates_removed:
            logger.info(f"Removed {self.last_duplicates_removed} duplicate transactions")
        return unique
