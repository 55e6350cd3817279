"""Token-stream transaction grammar.

Walks the tokens of every row in order instead of matching joined row text,
so it only depends on token order. In Sicoob-style PDFs the value and its
C/D suffix are frequently separate text items, and rows that the Y
clustering failed to split still parse as long as token order holds.

States::

    SEEKING          --date token-->            IN_DESCRIPTION
    IN_DESCRIPTION   --non-value token-->       IN_DESCRIPTION (append)
    IN_DESCRIPTION   --value token-->           AWAITING_SUFFIX
    AWAITING_SUFFIX  --C/D token-->             AWAITING_SUFFIX (merged, row values still collected)
    AWAITING_SUFFIX  --any other token-->       SEEKING (candidate emitted, token re-read)

End of stream emits a candidate waiting for its suffix and discards one
still without a value.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from .base_strategy import LineParsingStrategy
from ..models import ParsedTransactionCandidate, ReconstructedLine
from ..utils import split_value_token, is_suffix_token

logger = logging.getLogger(__name__)


class _State(Enum):
    SEEKING = "seeking"
    IN_DESCRIPTION = "in_description"
    AWAITING_SUFFIX = "awaiting_suffix"


class _InFlight:
    """Candidate being assembled from the token stream."""

    def __init__(self, date: str, page_number: int, is_future: bool):
        self.date = date
        self.page_number = page_number
        self.is_future = is_future
        self.parts: List[str] = []
        self.values: List[list] = []  # [number, suffix] pairs of the value row
        self.value_line: Optional[ReconstructedLine] = None

    @property
    def description(self) -> str:
        return ' '.join(self.parts)

    @property
    def raw_text(self) -> str:
        values = ' '.join(f"{number}{suffix or ''}" for number, suffix in self.values)
        return f"{self.date} {self.description} {values}".strip()


class TokenStreamStrategy(LineParsingStrategy):
    """Parse candidates from the token stream of all rows."""

    name = "token_stream"

    def parse(self, lines: Sequence[ReconstructedLine]) -> List[ParsedTransactionCandidate]:
        self._candidates: List[ParsedTransactionCandidate] = []
        self._state = _State.SEEKING
        self._current: Optional[_InFlight] = None
        in_future_section = False

        for line in lines:
            text = line.text

            if self._is_future_header(text):
                self._flush("future-section header")
                if not in_future_section:
                    logger.info(f"Future-section header on page {line.page_number}: '{text[:60]}'")
                in_future_section = True
                continue

            if self._is_skip_line(text):
                self._flush("balance/metadata row")
                continue

            for token in line.tokens:
                self._feed(token.text, line, in_future_section)

        self._flush("end of document")

        logger.info(f"Token-stream strategy produced {len(self._candidates)} candidates")
        return self._candidates

    def _feed(self, token: str, line: ReconstructedLine, in_future_section: bool) -> None:
        if self._state is _State.AWAITING_SUFFIX:
            current = self._current
            if is_suffix_token(token) and current.values[-1][1] is None:
                current.values[-1][1] = token.upper()
                return
            value = split_value_token(token)
            if value and line is current.value_line:
                current.values.append(list(value))
                return
            self._emit()
            # Re-read the token as the possible start of the next transaction

        if self._state is _State.SEEKING:
            if self._is_date_token(token):
                self._open(token, line, in_future_section)
            return

        # IN_DESCRIPTION
        current = self._current

        if self._is_date_token(token):
            self._discard("new date before a value")
            self._open(token, line, in_future_section)
            return

        value = split_value_token(token)
        if value:
            current.values.append(list(value))
            current.value_line = line
            self._state = _State.AWAITING_SUFFIX
            return

        if current.parts and self._is_detail_stop(token):
            self._discard(f"detail row '{token}' before a value")
            return

        current.parts.append(token)
        if len(current.description) > self.profile.max_continuation_chars:
            self._discard("continuation limit reached")

    def _is_detail_stop(self, token: str) -> bool:
        upper = token.upper()
        for stop in self.profile.detail_stop_tokens:
            stop = stop.upper()
            if upper == stop:
                return True
            if upper.startswith(stop) and not upper[len(stop)].isalpha():
                return True
        return False

    def _open(self, token: str, line: ReconstructedLine, in_future_section: bool) -> None:
        self._current = _InFlight(token, line.page_number, in_future_section)
        self._state = _State.IN_DESCRIPTION

    def _emit(self) -> None:
        current = self._current
        number, suffix = self._select_value([tuple(v) for v in current.values])
        candidate = self._build_candidate(
            date_text=current.date,
            description=current.description,
            number=number,
            suffix=suffix,
            is_future=current.is_future,
            page_number=current.page_number,
            raw_text=current.raw_text,
        )
        if candidate:
            self._candidates.append(candidate)
        self._current = None
        self._state = _State.SEEKING

    def _discard(self, reason: str) -> None:
        if self._current is not None:
            logger.debug(f"Dropped '{self._current.raw_text[:60]}' without value ({reason})")
        self._current = None
        self._state = _State.SEEKING

    def _flush(self, reason: str) -> None:
        """Close whatever is in flight at a section boundary."""
        if self._state is _State.AWAITING_SUFFIX:
            self._emit()
        elif self._state is _State.IN_DESCRIPTION:
            self._discard(reason)
