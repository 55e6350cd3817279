"""Global settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Directories
DATA_DIR = PROJECT_ROOT / "data"
PROFILES_DIR = Path(os.getenv("STATEMENT_PROFILES_DIR", str(DATA_DIR / "statement_profiles")))
LOGS_DIR = PROJECT_ROOT / "logs"
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(PROJECT_ROOT / "output")))

# Processing settings
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "20"))
DEFAULT_PROFILE = os.getenv("DEFAULT_PROFILE", "default")

# Parsing strategy used when a profile does not pin one:
# "auto" runs both strategies and keeps the richer result
PARSE_STRATEGY = os.getenv("PARSE_STRATEGY", "auto")
PARSE_STRATEGIES = ("auto", "line_regex", "token_stream")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = Path(os.getenv("LOG_FILE", str(LOGS_DIR / "statement_import.log")))
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() in ("1", "true", "yes")

# File types accepted by the import pipeline
PDF_SUFFIXES = (".pdf",)
DELIMITED_SUFFIXES = (".csv", ".txt")

# Currency used when a profile does not set one
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "BRL")
