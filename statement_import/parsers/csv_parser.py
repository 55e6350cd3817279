"""Parser for simple delimited (CSV/TXT) exports: date, description, value."""

import csv
import logging
from datetime import date
from typing import List, Optional

from ..models import NormalizedTransaction, TransactionType
from ..utils import parse_currency, parse_date
from .normalizer import finalize_description, derive_status

logger = logging.getLogger(__name__)

HEADER_MARKERS = ('data', 'date', 'valor')


class DelimitedTextParser:
    """
    Parse one-transaction-per-line exports.

    Expected columns: date, description, value. Extra columns are ignored.
    Semicolon is used as delimiter on lines that contain one, comma otherwise.
    A leading minus marks an expense; anything else is income.
    """

    def __init__(self, today: Optional[date] = None):
        self.today = today or date.today()
        self.skipped_rows = 0

    def parse(self, text: str) -> List[NormalizedTransaction]:
        """
        Parse delimited text.

        Args:
            text: File contents

        Returns:
            List of NormalizedTransaction in file order (no dedup)
        """
        lines = [line for line in (text or '').splitlines() if line.strip()]
        self.skipped_rows = 0

        if lines and self._is_header(lines[0]):
            logger.debug(f"Skipping header row: {lines[0][:60]}")
            lines = lines[1:]

        transactions = []
        for line_number, line in enumerate(lines, start=1):
            transaction = self._parse_line(line, line_number)
            if transaction is None:
                self.skipped_rows += 1
                continue
            transactions.append(transaction)

        logger.info(f"Delimited parser produced {len(transactions)} transactions ({self.skipped_rows} rows skipped)")
        return transactions

    @staticmethod
    def _is_header(line: str) -> bool:
        lower = line.lower()
        return any(marker in lower for marker in HEADER_MARKERS)

    @staticmethod
    def _split(line: str) -> List[str]:
        delimiter = ';' if ';' in line else ','
        row = next(csv.reader([line], delimiter=delimiter), [])
        return [field.strip().strip('"\'').strip() for field in row]

    def _parse_line(self, line: str, line_number: int) -> Optional[NormalizedTransaction]:
        fields = self._split(line)
        if len(fields) < 3:
            logger.debug(f"Line {line_number}: expected date, description and value, got {len(fields)} fields")
            return None

        date_field, description, value_field = fields[0], fields[1], fields[2]

        amount = parse_currency(value_field)
        if amount is None or round(abs(amount), 2) == 0:
            logger.debug(f"Line {line_number}: unparseable or zero value {value_field!r}")
            return None

        description = finalize_description(description)
        if not description:
            logger.debug(f"Line {line_number}: empty description")
            return None

        transaction_type = TransactionType.EXPENSE if amount < 0 else TransactionType.INCOME

        transaction_date = self._parse_date(date_field)
        if transaction_date is None:
            logger.warning(f"Line {line_number}: unrecognized date {date_field!r}, kept as-is")

        status = derive_status(transaction_date, False, self.today)
        pending = transaction_date is not None and transaction_date > self.today

        return NormalizedTransaction(
            date=transaction_date,
            description=description,
            value=round(abs(amount), 2),
            type=transaction_type,
            status=status,
            due_date=transaction_date if pending else None,
            is_reconciled=not pending,
            date_text=None if transaction_date else date_field,
        )

    @staticmethod
    def _parse_date(date_field: str) -> Optional[date]:
        if not date_field:
            return None
        parsed = parse_date(date_field)
        return parsed.date() if parsed else None
