"""Transaction grammar parser factory.

This module provides a facade over the two line-parsing strategies.

Design Pattern: Factory Method
- Encapsulates strategy instantiation
- Lets a statement profile (or the caller) pin a strategy
- "auto" runs both strategies and keeps the one yielding more candidates
"""

import logging
from typing import Dict, List, Optional, Sequence, Type

from ..config import StatementProfile
from ..models import ParsedTransactionCandidate, ReconstructedLine
from .base_strategy import LineParsingStrategy
from .line_regex_strategy import LineRegexStrategy
from .token_stream_strategy import TokenStreamStrategy

logger = logging.getLogger(__name__)

AUTO = "auto"


class TransactionGrammarParser:
    """
    Facade routing reconstructed lines to a parsing strategy.

    Usage:
        parser = TransactionGrammarParser(profile)
        candidates = parser.parse(lines)
        parser.selected_strategy  # name of the strategy that produced them
    """

    STRATEGIES: Dict[str, Type[LineParsingStrategy]] = {
        TokenStreamStrategy.name: TokenStreamStrategy,
        LineRegexStrategy.name: LineRegexStrategy,
    }

    def __init__(self, profile: StatementProfile, strategy: Optional[str] = None):
        """
        Initialize parser.

        Args:
            profile: Statement profile
            strategy: "auto", "line_regex" or "token_stream" (profile's choice if None)

        Raises:
            ValueError: If the strategy is unknown
        """
        self.profile = profile
        self.strategy_name = (strategy or profile.strategy or AUTO).lower()

        if self.strategy_name != AUTO and self.strategy_name not in self.STRATEGIES:
            supported = ', '.join(self.get_supported_strategies())
            raise ValueError(
                f"Unsupported parsing strategy: {self.strategy_name}. "
                f"Supported strategies: {supported}"
            )

        self.selected_strategy: Optional[str] = None

    def parse(self, lines: Sequence[ReconstructedLine]) -> List[ParsedTransactionCandidate]:
        """
        Parse candidates from the document's lines.

        Args:
            lines: Reconstructed lines of all pages, in order

        Returns:
            List of ParsedTransactionCandidate
        """
        if self.strategy_name != AUTO:
            self.selected_strategy = self.strategy_name
            return self._create_strategy(self.strategy_name).parse(lines)

        best_name = None
        best: List[ParsedTransactionCandidate] = []

        # Dict order decides ties: token_stream first
        for name in self.STRATEGIES:
            candidates = self._create_strategy(name).parse(lines)
            logger.debug(f"Auto-detect: {name} yielded {len(candidates)} candidates")
            if best_name is None or len(candidates) > len(best):
                best_name, best = name, candidates

        self.selected_strategy = best_name
        logger.info(f"Auto-detect selected {best_name} ({len(best)} candidates)")
        return best

    def _create_strategy(self, name: str) -> LineParsingStrategy:
        strategy_class = self.STRATEGIES[name]
        logger.debug(f"Created {strategy_class.__name__} for profile {self.profile.name}")
        return strategy_class(self.profile)

    @classmethod
    def get_supported_strategies(cls) -> List[str]:
        """
        Get list of accepted strategy names.

        Returns:
            Strategy names, "auto" first
        """
        return [AUTO] + list(cls.STRATEGIES.keys())
