"""Data models for statement import."""
from .token import PositionedToken, ReconstructedLine
from .transaction import (
    ParsedTransactionCandidate,
    NormalizedTransaction,
    TransactionType,
    TransactionStatus,
)
from .import_result import ImportResult

__all__ = [
    'PositionedToken',
    'ReconstructedLine',
    'ParsedTransactionCandidate',
    'NormalizedTransaction',
    'TransactionType',
    'TransactionStatus',
    'ImportResult',
]
