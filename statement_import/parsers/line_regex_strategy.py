"""Regex-over-line-text transaction grammar."""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .base_strategy import LineParsingStrategy
from ..models import ParsedTransactionCandidate, ReconstructedLine

logger = logging.getLogger(__name__)

# "14/11 ..." or "14/11/24 ..." at the start of a row
DATE_PREFIX_RE = re.compile(r'^(?P<date>\d{2}/\d{2}(?:/\d{2})?)(?=\s|$)\s*(?P<rest>.*)$')

# Brazilian value with an optional C/D marker, glued or space separated
VALUE_RE = re.compile(
    r'(?<![\d.,])(?P<number>\d{1,3}(?:\.\d{3})*,\d{2}|\d+,\d{2})(?!\d)'
    r'(?:\s?(?P<suffix>[CD])(?!\w))?\*?',
    re.IGNORECASE
)


@dataclass
class _PendingRow:
    date: str
    text: str
    page_number: int
    is_future: bool
    raw_lines: List[str]


class LineRegexStrategy(LineParsingStrategy):
    """
    Match each row's joined text against ``<date> <description> <value><C|D>``.

    Works well when the line reconstructor separates rows cleanly. Rows
    without a leading date only matter as continuations of an open
    candidate that is still waiting for its value.
    """

    name = "line_regex"

    def parse(self, lines: Sequence[ReconstructedLine]) -> List[ParsedTransactionCandidate]:
        candidates: List[ParsedTransactionCandidate] = []
        pending: Optional[_PendingRow] = None
        in_future_section = False

        for line in lines:
            text = line.text.strip()
            if not text:
                continue

            if self._is_future_header(text):
                self._discard(pending, "future-section header")
                pending = None
                if not in_future_section:
                    logger.info(f"Future-section header on page {line.page_number}: '{text[:60]}'")
                in_future_section = True
                continue

            if self._is_skip_line(text):
                self._discard(pending, "balance/metadata row")
                pending = None
                continue

            # New date first, then continuation
            date_match = DATE_PREFIX_RE.match(text)
            if date_match:
                self._discard(pending, "new date before a value")
                pending = _PendingRow(
                    date=date_match.group('date'),
                    text=date_match.group('rest'),
                    page_number=line.page_number,
                    is_future=in_future_section,
                    raw_lines=[text],
                )
            elif pending is not None:
                pending.text = f"{pending.text} {text}".strip()
                pending.raw_lines.append(text)
            else:
                continue

            values = list(VALUE_RE.finditer(pending.text))
            if values:
                candidate = self._complete(pending, values)
                if candidate:
                    candidates.append(candidate)
                pending = None
            elif len(pending.text) > self.profile.max_continuation_chars:
                self._discard(pending, "continuation limit reached")
                pending = None

        self._discard(pending, "end of document")

        logger.info(f"Line-regex strategy produced {len(candidates)} candidates")
        return candidates

    def _complete(self, pending: _PendingRow, values: List[re.Match]) -> Optional[ParsedTransactionCandidate]:
        pairs = [(m.group('number'), m.group('suffix')) for m in values]
        number, suffix = self._select_value(pairs)

        # Description is what precedes the first value on the row
        description = pending.text[:values[0].start()]

        return self._build_candidate(
            date_text=pending.date,
            description=description,
            number=number,
            suffix=suffix,
            is_future=pending.is_future,
            page_number=pending.page_number,
            raw_text=' | '.join(pending.raw_lines),
        )

    @staticmethod
    def _discard(pending: Optional[_PendingRow], reason: str) -> None:
        if pending is not None:
            logger.debug(f"Dropped '{pending.raw_lines[0][:60]}' without value ({reason})")
