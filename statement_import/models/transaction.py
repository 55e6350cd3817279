"""Transaction data models."""
from dataclasses import dataclass
from datetime import date as date_type
from typing import Optional
from enum import Enum


class TransactionType(Enum):
    """Direction of money for a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class TransactionStatus(Enum):
    """Settlement state of a transaction."""
    COMPLETED = "completed"
    PENDING = "pending"


@dataclass
class ParsedTransactionCandidate:
    """
    Tentative transaction produced by a parsing strategy.

    Attributes:
        date: "DD/MM" or "DD/MM/YY" as printed on the statement
        description: Raw description text (date and value removed)
        value: Positive magnitude
        type: Resolved transaction type
        is_future: Parsed inside a future/scheduled section
        suffix: Explicit C/D marker, if one was present
        page_number: Page the candidate started on
        raw_text: Source text for diagnostics
    """
    date: str
    description: str
    value: float
    type: TransactionType
    is_future: bool = False
    suffix: Optional[str] = None
    page_number: Optional[int] = None
    raw_text: Optional[str] = None

    @property
    def has_explicit_year(self) -> bool:
        return self.date.count('/') == 2


@dataclass
class NormalizedTransaction:
    """
    Final transaction in the shape handed to the transaction store.

    Attributes:
        date: Transaction date
        description: Cleaned description, at most 100 characters
        value: Amount, always positive
        type: income or expense
        status: completed or pending
        due_date: Due date for pending transactions
        is_reconciled: True for completed transactions
        date_text: Original date text when it could not be parsed (CSV pass-through)
    """
    date: Optional[date_type]
    description: str
    value: float
    type: TransactionType
    status: TransactionStatus = TransactionStatus.COMPLETED
    due_date: Optional[date_type] = None
    is_reconciled: bool = True
    date_text: Optional[str] = None

    def __post_init__(self):
        """Validate transaction data."""
        if self.value <= 0:
            raise ValueError("value must be positive")

    @property
    def is_pending(self) -> bool:
        return self.status is TransactionStatus.PENDING

    @property
    def iso_date(self) -> str:
        """ISO date string, or the untouched source text when it was not a date."""
        if self.date is None:
            return self.date_text or ""
        return self.date.isoformat()

    def dedup_key(self) -> tuple:
        """Identity used for duplicate detection."""
        return (self.iso_date, self.description, round(self.value, 2), self.type)

    def to_dict(self) -> dict:
        """Convert to the store's "new transaction" shape (no id/createdAt)."""
        result = {
            'date': self.iso_date,
            'description': self.description,
            'value': round(self.value, 2),
            'type': self.type.value,
            'status': self.status.value,
            'category': None,
            'paymentMethod': None,
            'isImported': True,
            'isReconciled': self.is_reconciled,
        }
        if self.due_date:
            result['dueDate'] = self.due_date.isoformat()
        return result
