"""Positioned text tokens and the visual rows built from them."""
from dataclasses import dataclass, field
from typing import List


@dataclass
class PositionedToken:
    """
    A text fragment placed on a page.

    Attributes:
        text: Trimmed, non-empty fragment text
        x: Horizontal position (page space)
        y: Vertical position (page space, origin bottom-left)
    """
    text: str
    x: float = 0.0
    y: float = 0.0


@dataclass
class ReconstructedLine:
    """
    Tokens believed to belong to one visual row, ordered left to right.

    Attributes:
        tokens: Row tokens sorted by ascending x
        page_number: Page the row was found on
    """
    tokens: List[PositionedToken] = field(default_factory=list)
    page_number: int = 1

    @property
    def text(self) -> str:
        """Row text, tokens joined by single spaces."""
        return " ".join(token.text for token in self.tokens)
