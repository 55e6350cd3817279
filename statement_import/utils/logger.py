"""Logging configuration for the application."""
import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

from ..config.settings import LOG_LEVEL, LOG_FILE, LOG_TO_FILE

ROOT_LOGGER_NAME = "statement_import"


def setup_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Set up logger with file and console handlers.

    Module loggers (``statement_import.*``) propagate here.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    # Console handler (WARNING and above, stderr keeps stdout clean for JSON output)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    # File handler (DEBUG and above)
    if LOG_TO_FILE:
        try:
            LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(detailed_formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {e}")

    return logger


def log_import_audit(
    file_name: str,
    source_type: str,
    success: bool,
    transaction_count: int = 0,
    profile: Optional[str] = None,
    strategy: Optional[str] = None,
    error: Optional[str] = None
) -> None:
    """
    Log an import audit trail entry.

    Args:
        file_name: Name of processed file
        source_type: pdf or csv
        success: Whether the import succeeded
        transaction_count: Number of transactions produced
        profile: Statement profile used
        strategy: Parsing strategy used
        error: Error message if failed
    """
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.audit")

    audit_data = {
        "timestamp": datetime.now().isoformat(),
        "file": Path(file_name).name if file_name else "-",
        "source": source_type,
        "success": success,
        "transactions": transaction_count,
    }

    if profile:
        audit_data["profile"] = profile
    if strategy:
        audit_data["strategy"] = strategy
    if error:
        audit_data["error"] = error

    audit_message = " | ".join(f"{k}={v}" for k, v in audit_data.items())
    logger.info(f"AUDIT: {audit_message}")
