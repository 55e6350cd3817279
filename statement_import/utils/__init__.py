"""Utility functions."""
from .logger import setup_logger, log_import_audit
from .currency_parser import (
    parse_currency,
    parse_brazilian_number,
    split_value_token,
    is_suffix_token,
    format_currency,
)
from .date_parser import parse_date, complete_partial_date, add_one_year

__all__ = [
    'setup_logger',
    'log_import_audit',
    'parse_currency',
    'parse_brazilian_number',
    'split_value_token',
    'is_suffix_token',
    'format_currency',
    'parse_date',
    'complete_partial_date',
    'add_one_year',
]
