"""Group positioned tokens into visual rows.

PDF text layers do not keep logical rows: two fragments on the same visual
line can differ in ``y`` by a few units because of font metrics. Rows are
rebuilt by clustering on ``y`` with a tolerance that belongs to the
statement profile (observed 2 to 6 units). Too tight splits one row in two,
too loose merges neighbouring rows.
"""

import logging
from typing import List, Sequence

from ..models import PositionedToken, ReconstructedLine

logger = logging.getLogger(__name__)


class LineReconstructor:
    """Cluster a page's tokens into top-to-bottom rows."""

    def __init__(self, y_tolerance: float = 3.0):
        """
        Args:
            y_tolerance: Max |y - row reference y| for a token to join a row
        """
        if y_tolerance < 0:
            raise ValueError("y_tolerance cannot be negative")
        self.y_tolerance = y_tolerance

    def reconstruct(
        self,
        tokens: Sequence[PositionedToken],
        page_number: int = 1
    ) -> List[ReconstructedLine]:
        """
        Build rows from one page's unordered tokens.

        Tokens are walked in reading order (y descending, x ascending). A token
        joins the current row while its y stays within tolerance of the row's
        reference y (the first token's y); otherwise it opens a new row. Each
        finished row is re-sorted by x.

        Args:
            tokens: Page tokens in any order
            page_number: Page number recorded on each line

        Returns:
            Lines in top-to-bottom order
        """
        if not tokens:
            return []

        ordered = sorted(tokens, key=lambda t: (-t.y, t.x))

        lines: List[ReconstructedLine] = []
        current: List[PositionedToken] = []
        reference_y = None

        for token in ordered:
            if reference_y is None or abs(token.y - reference_y) <= self.y_tolerance:
                current.append(token)
                if reference_y is None:
                    reference_y = token.y
            else:
                lines.append(self._finish_row(current, page_number))
                current = [token]
                reference_y = token.y

        if current:
            lines.append(self._finish_row(current, page_number))

        logger.debug(
            f"Page {page_number}: {len(tokens)} tokens -> {len(lines)} lines "
            f"(y_tolerance={self.y_tolerance})"
        )
        return lines

    @staticmethod
    def _finish_row(tokens: List[PositionedToken], page_number: int) -> ReconstructedLine:
        return ReconstructedLine(tokens=sorted(tokens, key=lambda t: t.x), page_number=page_number)
