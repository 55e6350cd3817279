"""Parse currency amounts as printed on Brazilian statements and exports."""
import math
import re
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# 1.234,56 / 12,00 with an optional C/D (or *) marker glued after it
VALUE_TOKEN_RE = re.compile(r'^(?P<number>\d{1,3}(?:\.\d{3})*,\d{2}|\d+,\d{2})(?P<suffix>[CD])?\*?$', re.IGNORECASE)
SUFFIX_TOKEN_RE = re.compile(r'^[CD]$', re.IGNORECASE)


def parse_currency(amount_string: str) -> Optional[float]:
    """
    Parse currency amount from string.

    Handles various formats:
    - R$ 1.234,56
    - -R$ 25,80
    - 1.234,56 (Brazilian)
    - 1,234.56 / 1234.56 (dot decimal)
    - (1.234,56) - negative amount

    Args:
        amount_string: String containing currency amount

    Returns:
        Float amount (signed) or None if parsing fails
    """
    if not amount_string or not isinstance(amount_string, str):
        return None

    cleaned = amount_string.strip()

    if not cleaned:
        return None

    is_negative = False

    # Detect parentheses notation for negative
    if cleaned.startswith('(') and cleaned.endswith(')'):
        is_negative = True
        cleaned = cleaned[1:-1].strip()

    # Detect explicit negative sign (before or after the currency symbol)
    if cleaned.startswith('-') or re.match(r'^R\$\s*-', cleaned):
        is_negative = True

    cleaned = re.sub(r'R\$|[$€£]', '', cleaned)
    cleaned = cleaned.replace('-', '').replace(' ', '').replace('\u00a0', '')

    # Brazilian format (1.234,56) vs dot decimal format (1,234.56)
    if ',' in cleaned and '.' in cleaned:
        if cleaned.rfind(',') > cleaned.rfind('.'):
            cleaned = cleaned.replace('.', '').replace(',', '.')
        else:
            cleaned = cleaned.replace(',', '')
    elif ',' in cleaned:
        # Comma with up to 2 trailing digits is the decimal separator
        if re.search(r',\d{1,2}$', cleaned):
            cleaned = cleaned.replace(',', '.')
        else:
            cleaned = cleaned.replace(',', '')
    elif re.fullmatch(r'\d{1,3}(\.\d{3})+', cleaned):
        # Only thousand separators, e.g. "1.200"
        cleaned = cleaned.replace('.', '')

    if not re.fullmatch(r'\d+(\.\d+)?', cleaned):
        logger.debug(f"Could not parse currency amount: {amount_string}")
        return None

    amount = float(cleaned)
    if not math.isfinite(amount):
        return None
    return -amount if is_negative else amount


def parse_brazilian_number(number_str: str) -> Optional[float]:
    """
    Parse a statement value such as "1.234,56" into its positive magnitude.

    Returns None for anything that is not a finite, non-zero number.
    """
    amount = parse_currency(number_str)
    if amount is None or amount == 0:
        return None
    return abs(amount)


def split_value_token(token: str) -> Optional[Tuple[str, Optional[str]]]:
    """
    Split a value token into its number and C/D suffix.

    Example:
        >>> split_value_token("124,37D")
        ('124,37', 'D')
        >>> split_value_token("1.200,00")
        ('1.200,00', None)

    Returns:
        (number, suffix) or None when the token is not a value
    """
    match = VALUE_TOKEN_RE.match(token.strip())
    if not match:
        return None
    suffix = match.group('suffix')
    return match.group('number'), suffix.upper() if suffix else None


def is_suffix_token(token: str) -> bool:
    """True for an isolated credit/debit marker."""
    return bool(SUFFIX_TOKEN_RE.match(token.strip()))


def format_currency(amount: float, currency: str = "BRL") -> str:
    """
    Format amount as currency string (Brazilian separators for BRL).

    Args:
        amount: Numeric amount
        currency: Currency code (BRL, USD, EUR)

    Returns:
        Formatted currency string
    """
    symbols = {
        "BRL": "R$ ",
        "USD": "$",
        "EUR": "€"
    }

    symbol = symbols.get(currency, "R$ ")

    formatted = f"{abs(amount):,.2f}"
    if currency == "BRL":
        formatted = formatted.replace(',', '_').replace('.', ',').replace('_', '.')

    if amount < 0:
        return f"-{symbol}{formatted}"
    else:
        return f"{symbol}{formatted}"
