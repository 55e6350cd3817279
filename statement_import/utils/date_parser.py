"""Date parsing for Brazilian statements and delimited exports."""
import logging
import re
from datetime import date, datetime
from typing import Optional, List

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

PARTIAL_DATE_RE = re.compile(r'^(?P<day>\d{1,2})/(?P<month>\d{1,2})(?:/(?P<year>\d{2}|\d{4}))?$')

# Day, month and year parts ("15", "03"|"mar", "2024") needed before dateutil may guess
DATE_PART_RE = re.compile(r'\d+|[^\W\d_]{3,}')

DEFAULT_DATE_FORMATS = [
    "%d/%m/%Y",      # 15/03/2024
    "%Y-%m-%d",      # 2024-03-15 (ISO)
    "%d/%m/%y",      # 15/03/24
    "%d-%m-%Y",      # 15-03-2024
    "%d.%m.%Y",      # 15.03.2024
]


def complete_partial_date(date_text: str, year: int) -> Optional[date]:
    """
    Complete a statement date with the reference year.

    "DD/MM" takes ``year``; "DD/MM/YY" carries its own year (20YY) which
    takes precedence; "DD/MM/YYYY" is used as-is.

    Args:
        date_text: Date as printed on the statement
        year: Statement reference year

    Returns:
        date, or None when the text is not a valid calendar date

    Example:
        >>> complete_partial_date("14/11", 2024)
        datetime.date(2024, 11, 14)
        >>> complete_partial_date("05/01/25", 2024)
        datetime.date(2025, 1, 5)
    """
    match = PARTIAL_DATE_RE.match(date_text.strip())
    if not match:
        return None

    own_year = match.group('year')
    if own_year is None:
        resolved_year = year
    elif len(own_year) == 2:
        resolved_year = 2000 + int(own_year)
    else:
        resolved_year = int(own_year)

    try:
        return date(resolved_year, int(match.group('month')), int(match.group('day')))
    except ValueError:
        logger.debug(f"Not a calendar date: {date_text} (year {resolved_year})")
        return None


def add_one_year(value: date) -> date:
    """Same month/day next year (29 Feb becomes 28 Feb)."""
    return value + relativedelta(years=1)


def parse_date(
    date_string: str,
    date_formats: Optional[List[str]] = None
) -> Optional[datetime]:
    """
    Parse date string using multiple strategies.

    Args:
        date_string: String containing date
        date_formats: List of strptime formats to try

    Returns:
        datetime object or None if parsing fails
    """
    if not date_string or not isinstance(date_string, str):
        return None

    date_string = ' '.join(date_string.split())

    if not date_string:
        return None

    for fmt in date_formats or DEFAULT_DATE_FORMATS:
        try:
            return datetime.strptime(date_string, fmt)
        except ValueError:
            continue

    # dateutil is more flexible but slower; dayfirst for Brazilian dates.
    # Partial strings ("15", "2024") would get today's missing parts.
    if len(DATE_PART_RE.findall(date_string)) >= 3:
        try:
            return dateutil_parser.parse(date_string, dayfirst=True)
        except (ValueError, OverflowError, TypeError):
            pass

    logger.warning(f"Could not parse date: {date_string}")
    return None
