"""Transaction parsing modules."""
from .line_reconstructor import LineReconstructor
from .year_resolver import StatementYearResolver
from .base_strategy import LineParsingStrategy
from .line_regex_strategy import LineRegexStrategy
from .token_stream_strategy import TokenStreamStrategy
from .grammar_parser import TransactionGrammarParser
from .normalizer import TransactionNormalizer, finalize_description
from .csv_parser import DelimitedTextParser

__all__ = [
    'LineReconstructor',
    'StatementYearResolver',
    'LineParsingStrategy',
    'LineRegexStrategy',
    'TokenStreamStrategy',
    'TransactionGrammarParser',
    'TransactionNormalizer',
    'finalize_description',
    'DelimitedTextParser',
]
