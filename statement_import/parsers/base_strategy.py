"""Base line-parsing strategy with shared transaction-grammar utilities.

This module provides the abstract base class that both parsing strategies
inherit from. Following the Template Method pattern, it owns everything the
strategies agree on (skip lines, future-section headers, credit/debit
resolution, value selection, candidate validation) while each subclass
decides how a transaction is delimited in the input.

Common Parsing Patterns:
-----------------------

1. Line text vs token stream:
   The line-regex strategy matches each reconstructed row's joined text:

     "14/11 PIX REC.OUTRA IF MT 1,00C"

   The token-stream strategy walks the row tokens directly, which survives
   rows that the Y clustering failed to separate cleanly and values whose
   C/D marker is a separate text item:

     ["14/11", "PIX", "REC.OUTRA", "IF", "MT", "1,00", "C"]

2. Multi-line descriptions:
   A dated row without a value absorbs the following rows until a value is
   found, a new date starts, or ``max_continuation_chars`` is exceeded.
   Long PIX details often wrap onto an undated continuation row.

3. Section state:
   Once a future-section header ("LANÇAMENTOS FUTUROS", "AGENDADOS", ...)
   is seen, every later candidate of the document is marked ``is_future``.
   The flag is never cleared.

4. Pattern Matching Priority:
   Always check for a NEW date before completing a pending candidate, so
   the start of a new transaction is never taken as the continuation of
   the previous one.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..config import StatementProfile
from ..models import ParsedTransactionCandidate, ReconstructedLine, TransactionType
from ..utils import parse_brazilian_number

logger = logging.getLogger(__name__)

DATE_TOKEN_RE = re.compile(r'^\d{2}/\d{2}(?:/\d{2})?$')


class LineParsingStrategy(ABC):
    """
    Abstract base class for transaction-grammar strategies.

    Subclasses must implement:
    - parse(): turn the document's lines into candidates
    """

    name = "base"

    def __init__(self, profile: StatementProfile):
        """
        Initialize strategy with a statement profile.

        Args:
            profile: Heuristics of the statement source (keywords, patterns, limits)
        """
        self.profile = profile
        self.skip_pattern = self._compile_keywords(profile.skip_keywords)
        self.future_patterns = self._compile_future_patterns(profile.future_section_patterns)
        self.expense_patterns = [(kw, self._word_start_pattern(kw)) for kw in profile.expense_keywords]
        self.income_patterns = [(kw, self._word_start_pattern(kw)) for kw in profile.income_keywords]

    @staticmethod
    def _word_start_pattern(keyword: str) -> re.Pattern:
        # Keyword must start a word: "DEB" matches "DEBITO", not "ADEBX"
        return re.compile(r'(?<!\w)' + re.escape(keyword.strip()), re.IGNORECASE)

    def _compile_keywords(self, keywords: Sequence[str]) -> Optional[re.Pattern]:
        keywords = [kw.strip() for kw in keywords if kw and kw.strip()]
        if not keywords:
            return None
        alternatives = '|'.join(re.escape(kw) for kw in keywords)
        # Plain substring: "BLOQ" also catches "DESBLOQUEIO"
        return re.compile(alternatives, re.IGNORECASE)

    def _compile_future_patterns(self, patterns: Sequence[str]) -> List[re.Pattern]:
        compiled = []
        for pattern in patterns:
            try:
                compiled.append(re.compile(pattern, re.IGNORECASE))
            except re.error as e:
                logger.error(f"Invalid future-section pattern {pattern!r} in profile {self.profile.name}: {e}")
        return compiled

    @abstractmethod
    def parse(self, lines: Sequence[ReconstructedLine]) -> List[ParsedTransactionCandidate]:
        """
        Parse candidates from the document's lines (all pages, in order).

        Args:
            lines: Reconstructed lines, top-to-bottom, page after page

        Returns:
            Candidates in document order
        """
        pass

    def _is_skip_line(self, text: str) -> bool:
        """
        Check if text belongs to a running-balance/metadata row.

        Example:
            >>> strategy._is_skip_line("SALDO DO DIA 1.200,00")
            True
        """
        if not text or not text.strip():
            return True
        return bool(self.skip_pattern and self.skip_pattern.search(text))

    def _is_future_header(self, text: str) -> bool:
        """Check if text opens the future/scheduled entries section."""
        return any(pattern.search(text) for pattern in self.future_patterns)

    @staticmethod
    def _is_date_token(text: str) -> bool:
        return bool(DATE_TOKEN_RE.match(text))

    @staticmethod
    def _select_value(values: Sequence[Tuple[str, Optional[str]]]) -> Tuple[str, Optional[str]]:
        """
        Pick the transaction amount among the values of one row.

        The first value carrying an explicit C/D suffix wins (the other is
        usually a running balance); otherwise the first value in row order.
        """
        for number, suffix in values:
            if suffix:
                return number, suffix
        return values[0]

    def _resolve_type(self, description: str, suffix: Optional[str]) -> TransactionType:
        """
        Resolve income/expense for a candidate.

        Precedence:
        1. Explicit suffix: D -> expense, C -> income
        2. Keywords: the longest matching keyword wins, ties go to expense
        3. The profile's default_type (expense unless configured)

        Args:
            description: Candidate description
            suffix: "C", "D" or None

        Returns:
            TransactionType
        """
        if suffix:
            return TransactionType.EXPENSE if suffix.upper() == 'D' else TransactionType.INCOME

        expense_hit = max((len(kw) for kw, p in self.expense_patterns if p.search(description)), default=0)
        income_hit = max((len(kw) for kw, p in self.income_patterns if p.search(description)), default=0)

        if expense_hit or income_hit:
            return TransactionType.INCOME if income_hit > expense_hit else TransactionType.EXPENSE

        default = TransactionType(self.profile.default_type)
        logger.warning(
            f"Ambiguous type for '{description[:40]}': no C/D marker and no keyword, "
            f"defaulting to {default.value}"
        )
        return default

    def _build_candidate(
        self,
        date_text: str,
        description: str,
        number: str,
        suffix: Optional[str],
        is_future: bool,
        page_number: Optional[int] = None,
        raw_text: Optional[str] = None
    ) -> Optional[ParsedTransactionCandidate]:
        """
        Validate parsed pieces and build a candidate.

        Malformed rows are skipped here, never raised.

        Returns:
            ParsedTransactionCandidate or None if the row is rejected
        """
        value = parse_brazilian_number(number)
        if value is None:
            logger.debug(f"Rejected '{raw_text}': unparseable or zero value {number!r}")
            return None

        description = ' '.join(description.split())
        if len(description) < self.profile.min_description_length:
            logger.debug(f"Rejected '{raw_text}': description too short ({description!r})")
            return None

        if self._is_skip_line(description):
            logger.debug(f"Rejected '{raw_text}': balance/metadata row")
            return None

        return ParsedTransactionCandidate(
            date=date_text,
            description=description,
            value=value,
            type=self._resolve_type(description, suffix),
            is_future=is_future,
            suffix=suffix.upper() if suffix else None,
            page_number=page_number,
            raw_text=raw_text,
        )
