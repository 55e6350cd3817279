"""Load and manage statement-source profiles.

A profile bundles the heuristics that get re-tuned for every statement
family: the Y-clustering tolerance, skip keywords, future-section header
patterns, the expense/income keyword sets and the parsing strategy.
"""
import logging
from pathlib import Path
from typing import Dict, Optional, List
import yaml

from .settings import PROFILES_DIR, DEFAULT_PROFILE, PARSE_STRATEGY, DEFAULT_CURRENCY
from ..errors import ProfileNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SKIP_KEYWORDS = [
    'SALDO', 'BLOQ', 'LIMITE', 'RESUMO', 'ANTERIOR', 'DISPONÍVEL', 'DISPONIVEL'
]

DEFAULT_FUTURE_SECTION_PATTERNS = [
    r'lan[çc]amentos\s+futuros',
    r'lanc\.?\s*futuros',
    r'\bprevistos\b',
    r'\bagendad[oa]s\b',
]

DEFAULT_EXPENSE_KEYWORDS = [
    'DEB', 'EMIT', 'TARIFA', 'PAGAMENTO', 'SAQUE', 'TED', 'DOC', 'PIX ENV', 'TRANSF.'
]

DEFAULT_INCOME_KEYWORDS = ['REC', 'CRED', 'DEP', 'PIX REC', 'TRANSF REC']

# PIX detail rows that follow the history row and must not extend its description
DEFAULT_DETAIL_STOP_TOKENS = ['RECEBIMENTO', 'PAGAMENTO', 'DOC']


class StatementProfile:
    """Represents the parsing configuration of one statement source."""

    def __init__(self, config_dict: Optional[dict] = None, name: str = "default"):
        """Initialize profile from dictionary; missing keys fall back to defaults."""
        self.name = name
        self._config = config_dict or {}

    @property
    def identifiers(self) -> List[str]:
        """Strings that identify this statement source in the first page text."""
        return self._config.get('identifiers', [])

    @property
    def y_tolerance(self) -> float:
        """Maximum Y distance for two tokens to share a row."""
        return float(self._config.get('y_tolerance', 3.0))

    @property
    def skip_keywords(self) -> List[str]:
        """Keywords marking balance/limit/summary rows."""
        return self._config.get('skip_keywords', DEFAULT_SKIP_KEYWORDS)

    @property
    def future_section_patterns(self) -> List[str]:
        """Regex patterns (case-insensitive) of future/scheduled section headers."""
        return self._config.get('future_section_patterns', DEFAULT_FUTURE_SECTION_PATTERNS)

    @property
    def expense_keywords(self) -> List[str]:
        return self._config.get('expense_keywords', DEFAULT_EXPENSE_KEYWORDS)

    @property
    def income_keywords(self) -> List[str]:
        return self._config.get('income_keywords', DEFAULT_INCOME_KEYWORDS)

    @property
    def detail_stop_tokens(self) -> List[str]:
        """Token prefixes that end a description in the token-stream strategy."""
        return self._config.get('detail_stop_tokens', DEFAULT_DETAIL_STOP_TOKENS)

    @property
    def default_type(self) -> str:
        """Type assigned when neither a suffix nor a keyword decides it."""
        value = str(self._config.get('default_type', 'expense')).lower()
        if value not in ('income', 'expense'):
            logger.warning(f"Invalid default_type '{value}' in profile {self.name}, using expense")
            return 'expense'
        return value

    @property
    def strategy(self) -> str:
        """Parsing strategy: auto, line_regex or token_stream."""
        return self._config.get('strategy', PARSE_STRATEGY)

    @property
    def min_description_length(self) -> int:
        return int(self._config.get('min_description_length', 3))

    @property
    def max_continuation_chars(self) -> int:
        """Upper bound of accumulated text while waiting for a value."""
        return int(self._config.get('max_continuation_chars', 400))

    @property
    def max_description_length(self) -> int:
        return int(self._config.get('max_description_length', 100))

    @property
    def currency(self) -> str:
        """Currency code of the amounts (number formats in previews and exports)."""
        return self._config.get('currency', DEFAULT_CURRENCY)

    def to_dict(self) -> dict:
        """Resolved profile values, defaults included."""
        return {
            'name': self.name,
            'identifiers': self.identifiers,
            'y_tolerance': self.y_tolerance,
            'skip_keywords': self.skip_keywords,
            'future_section_patterns': self.future_section_patterns,
            'expense_keywords': self.expense_keywords,
            'income_keywords': self.income_keywords,
            'detail_stop_tokens': self.detail_stop_tokens,
            'default_type': self.default_type,
            'strategy': self.strategy,
            'min_description_length': self.min_description_length,
            'max_continuation_chars': self.max_continuation_chars,
            'max_description_length': self.max_description_length,
            'currency': self.currency,
        }

    def __repr__(self) -> str:
        return f"StatementProfile(name={self.name!r}, y_tolerance={self.y_tolerance}, strategy={self.strategy!r})"


class ProfileLoader:
    """Loads and manages statement profiles."""

    def __init__(self, profiles_dir: Path = PROFILES_DIR):
        """
        Initialize profile loader.

        Args:
            profiles_dir: Directory containing profile YAML files
        """
        self.profiles_dir = Path(profiles_dir)
        self._profiles: Dict[str, StatementProfile] = {}
        self._load_all_profiles()

    def _load_all_profiles(self) -> None:
        """Load all profile files."""
        if not self.profiles_dir.exists():
            logger.warning(f"Statement profile directory not found: {self.profiles_dir}")
            return

        yaml_files = sorted(self.profiles_dir.glob("*.yaml")) + sorted(self.profiles_dir.glob("*.yml"))

        if not yaml_files:
            logger.warning(f"No statement profiles found in {self.profiles_dir}")
            return

        for yaml_file in yaml_files:
            try:
                self._load_profile(yaml_file)
            except (OSError, yaml.YAMLError, AttributeError) as e:
                logger.error(f"Failed to load profile {yaml_file}: {e}")

        logger.info(f"Loaded {len(self._profiles)} statement profiles")

    def _load_profile(self, yaml_file: Path) -> None:
        """
        Load a single profile file.

        Each YAML file has top-level keys naming profiles, e.g. ``sicoob: {...}``.

        Args:
            yaml_file: Path to YAML profile file
        """
        with open(yaml_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        for profile_name, config_dict in data.items():
            if isinstance(config_dict, dict):
                self._profiles[profile_name.lower()] = StatementProfile(config_dict, profile_name.lower())
                logger.debug(f"Loaded profile {profile_name}")

    def get_profile(self, name: str) -> StatementProfile:
        """
        Get a profile by name.

        Args:
            name: Profile name (case-insensitive)

        Returns:
            StatementProfile

        Raises:
            ProfileNotFoundError: If no profile has that name
        """
        profile = self._profiles.get(name.lower())
        if profile is None:
            raise ProfileNotFoundError(
                f"Unknown statement profile: {name}. "
                f"Available profiles: {', '.join(self.get_all_profiles()) or 'none'}"
            )
        return profile

    def default_profile(self) -> StatementProfile:
        """The configured default profile, or built-in defaults when none is on disk."""
        profile = self._profiles.get(DEFAULT_PROFILE.lower())
        if profile is None:
            logger.debug(f"Default profile '{DEFAULT_PROFILE}' not found on disk, using built-in defaults")
            return StatementProfile({}, DEFAULT_PROFILE.lower())
        return profile

    def detect_profile(self, text: str) -> Optional[StatementProfile]:
        """
        Detect the statement source from first-page text using identifiers.

        Args:
            text: Text of the first page

        Returns:
            StatementProfile or None if nothing matched
        """
        header_text = text[:3000].lower()

        for profile_name, profile in self._profiles.items():
            for identifier in profile.identifiers:
                if identifier.lower() in header_text:
                    logger.info(f"Detected statement profile: {profile_name}")
                    return profile

        logger.info("No statement profile matched, falling back to default")
        return None

    def get_all_profiles(self) -> List[str]:
        """Get list of all profile names."""
        return list(self._profiles.keys())

    @property
    def profiles_count(self) -> int:
        return len(self._profiles)


# Singleton instance
_loader: Optional[ProfileLoader] = None


def get_profile_loader() -> ProfileLoader:
    """Get singleton instance of ProfileLoader."""
    global _loader
    if _loader is None:
        _loader = ProfileLoader()
    return _loader
