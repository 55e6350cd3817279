"""Import result model."""
from dataclasses import dataclass, field
from typing import List, Optional
from datetime import datetime

from .transaction import NormalizedTransaction, TransactionType


@dataclass
class ImportResult:
    """
    Complete result of one statement import attempt.

    Attributes:
        transactions: Normalized transactions, ready for preview/commit
        success: Whether the document could be read
        source_type: "pdf" or "csv"
        file_name: Name of the imported file, when known
        profile_name: Statement profile used
        strategy: Parsing strategy that produced the candidates
        statement_year: Reference year resolved for partial dates
        currency: Currency code of the amounts, from the profile
        page_count: Pages read from the document
        candidate_count: Candidates before normalization/dedup
        duplicates_removed: Candidates dropped as duplicates
        error_kind: "unreadable" or "unsupported" when success is False
        error_message: Human-readable error
        warnings: Non-fatal problems found while importing
        processing_time: Seconds spent
        imported_at: Timestamp of the import
    """
    transactions: List[NormalizedTransaction] = field(default_factory=list)
    success: bool = True
    source_type: str = "unknown"
    file_name: Optional[str] = None
    profile_name: Optional[str] = None
    strategy: Optional[str] = None
    statement_year: Optional[int] = None
    currency: str = "BRL"
    page_count: int = 0
    candidate_count: int = 0
    duplicates_removed: int = 0
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    processing_time: float = 0.0
    imported_at: datetime = field(default_factory=datetime.now)

    @property
    def transaction_count(self) -> int:
        """Get number of transactions."""
        return len(self.transactions)

    @property
    def pending_transactions(self) -> List[NormalizedTransaction]:
        return [t for t in self.transactions if t.is_pending]

    @property
    def total_income(self) -> float:
        return sum(t.value for t in self.transactions if t.type is TransactionType.INCOME)

    @property
    def total_expense(self) -> float:
        return sum(t.value for t in self.transactions if t.type is TransactionType.EXPENSE)

    def to_new_transactions(self) -> List[dict]:
        """Transactions in the store's bulk-insert shape."""
        return [t.to_dict() for t in self.transactions]

    def to_dict(self) -> dict:
        """Convert import result to dictionary."""
        return {
            'success': self.success,
            'source_type': self.source_type,
            'file_name': self.file_name,
            'profile': self.profile_name,
            'strategy': self.strategy,
            'statement_year': self.statement_year,
            'currency': self.currency,
            'page_count': self.page_count,
            'candidate_count': self.candidate_count,
            'duplicates_removed': self.duplicates_removed,
            'transaction_count': self.transaction_count,
            'pending_count': len(self.pending_transactions),
            'total_income': round(self.total_income, 2),
            'total_expense': round(self.total_expense, 2),
            'processing_time': round(self.processing_time, 2),
            'imported_at': self.imported_at.isoformat(),
            'transactions': self.to_new_transactions(),
            'warnings': self.warnings,
            'error_kind': self.error_kind,
            'error_message': self.error_message,
        }
