"""Bank statement import: PDF text layers and delimited exports to transactions."""
from .errors import StatementImportError, DecodeError, UnsupportedFormatError, ProfileNotFoundError
from .models import ImportResult, NormalizedTransaction, TransactionType, TransactionStatus
from .pipeline import ImportPipeline, to_new_transactions

__version__ = "0.1.0"

__all__ = [
    'ImportPipeline',
    'to_new_transactions',
    'ImportResult',
    'NormalizedTransaction',
    'TransactionType',
    'TransactionStatus',
    'StatementImportError',
    'DecodeError',
    'UnsupportedFormatError',
    'ProfileNotFoundError',
]
