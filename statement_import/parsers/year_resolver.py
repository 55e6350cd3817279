"""Resolve the reference year of a statement."""
import logging
import re
from datetime import date
from typing import Iterable, Optional, Union

from ..models import ReconstructedLine

logger = logging.getLogger(__name__)

FULL_DATE_RE = re.compile(r'\b(\d{2})/(\d{2})/(\d{4})\b')


class StatementYearResolver:
    """
    Find the year used to complete DD/MM dates.

    The first DD/MM/YYYY in the statement (usually the header period or
    emission date) wins. This is one global year per statement: rows of a
    statement spanning December into January get the header's year unless
    they carry their own DD/MM/YY suffix.
    """

    def __init__(self, today: Optional[date] = None):
        self.today = today or date.today()

    def resolve(self, source: Union[str, Iterable[Union[str, ReconstructedLine]]]) -> int:
        """
        Resolve the statement year.

        Args:
            source: Full text, or lines (text or ReconstructedLine) in page order

        Returns:
            4-digit year, defaulting to the processing year
        """
        texts = [source] if isinstance(source, str) else source

        for item in texts:
            text = item.text if isinstance(item, ReconstructedLine) else str(item)
            match = FULL_DATE_RE.search(text)
            if match:
                year = int(match.group(3))
                logger.debug(f"Statement year {year} from '{match.group(0)}'")
                return year

        logger.info(f"No DD/MM/YYYY date found, using processing year {self.today.year}")
        return self.today.year
