"""
Main import pipeline.

Coordinates decoding, line reconstruction, parsing and normalization of a
bank statement, and turns the outcome into an ImportResult ready for the
confirmation step.
"""
import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union
from datetime import date

from .config import StatementProfile, ProfileLoader, get_profile_loader
from .config.settings import PDF_SUFFIXES, DELIMITED_SUFFIXES
from .errors import DecodeError, UnsupportedFormatError
from .extractors import BaseDocument, PDF_BACKENDS, extract_tokens
from .models import ImportResult, NormalizedTransaction, PositionedToken, ReconstructedLine
from .parsers import (
    LineReconstructor,
    StatementYearResolver,
    TransactionGrammarParser,
    TransactionNormalizer,
    DelimitedTextParser,
)
from .utils import setup_logger, log_import_audit

logger = setup_logger()

NO_TRANSACTIONS_WARNING = "No importable transactions found, try another format"

UNREADABLE = "unreadable"
UNSUPPORTED = "unsupported"


def to_new_transactions(transactions: Iterable[NormalizedTransaction]) -> List[dict]:
    """
    Convert transactions to the store's bulk-insert shape.

    Each item carries date, description, value, type, status, dueDate (pending
    only), category/paymentMethod (None) and the isImported/isReconciled flags.
    """
    return [t.to_dict() for t in transactions]


class ImportPipeline:
    """
    Pipeline for statement import.

    Phases (PDF):
    1. Decode - positioned fragments per page, pages strictly in order
    2. Rebuild - tokens clustered into rows with the profile's Y tolerance
    3. Parse - transaction grammar (line_regex / token_stream / auto)
    4. Normalize - year completion, cleanup, status, dedup

    Delimited files (CSV/TXT) go through DelimitedTextParser instead.
    """

    def __init__(
        self,
        profile_loader: Optional[ProfileLoader] = None,
        today: Optional[date] = None,
        pdf_backend: str = "pdfplumber"
    ):
        """
        Initialize pipeline.

        Args:
            profile_loader: Statement profile registry (shared singleton if None)
            today: Processing date, used for year fallback and status
            pdf_backend: "pdfplumber" or "pymupdf"
        """
        if pdf_backend not in PDF_BACKENDS:
            raise ValueError(
                f"Unknown PDF backend: {pdf_backend}. Available: {', '.join(PDF_BACKENDS)}"
            )
        self.profile_loader = profile_loader or get_profile_loader()
        self.today = today or date.today()
        self.pdf_backend = pdf_backend

    def process(
        self,
        file_path: Union[str, Path],
        profile_name: Optional[str] = None,
        strategy: Optional[str] = None
    ) -> ImportResult:
        """
        Import a statement file end-to-end.

        Args:
            file_path: Path to a PDF, CSV or TXT file
            profile_name: Statement profile (auto-detect if None)
            strategy: Parsing strategy override

        Returns:
            ImportResult. Unreadable and unsupported files give
            success=False with error_kind set; no partial results.

        Raises:
            ProfileNotFoundError: If profile_name is unknown
            ValueError: If strategy is unknown
        """
        file_path = Path(file_path)
        profile = self.profile_loader.get_profile(profile_name) if profile_name else None

        logger.info(f"Importing statement: {file_path.name}")
        start_time = time.time()
        suffix = file_path.suffix.lower()
        source_type = "pdf" if suffix in PDF_SUFFIXES else "csv"

        try:
            if suffix in PDF_SUFFIXES:
                with self.open_document(file_path) as document:
                    result = self.parse_document(document, profile, strategy)
            elif suffix in DELIMITED_SUFFIXES:
                result = self.parse_text(self._read_text(file_path), profile)
            else:
                raise UnsupportedFormatError(
                    f"Unsupported file type '{suffix or file_path.name}'. "
                    f"Supported: {', '.join(PDF_SUFFIXES + DELIMITED_SUFFIXES)}"
                )

        except DecodeError as e:
            return self._create_error_result(
                file_path, source_type, UNREADABLE,
                f"Unreadable file: {e}",
                processing_time=time.time() - start_time
            )
        except UnsupportedFormatError as e:
            return self._create_error_result(
                file_path, "unknown", UNSUPPORTED,
                f"Unsupported or unrecognized layout: {e}",
                processing_time=time.time() - start_time
            )

        result.file_name = file_path.name
        result.processing_time = time.time() - start_time

        log_import_audit(
            file_name=file_path.name,
            source_type=result.source_type,
            success=True,
            transaction_count=result.transaction_count,
            profile=result.profile_name,
            strategy=result.strategy
        )

        logger.info(
            f"Import complete in {result.processing_time:.2f}s: "
            f"{result.transaction_count} transactions ({len(result.pending_transactions)} pending)"
        )
        return result

    def open_document(self, file_path: Path) -> BaseDocument:
        """Open a PDF with the configured backend."""
        return PDF_BACKENDS[self.pdf_backend](file_path)

    def parse_document(
        self,
        document: BaseDocument,
        profile: Optional[Union[str, StatementProfile]] = None,
        strategy: Optional[str] = None
    ) -> ImportResult:
        """
        Run the PDF pipeline on a decoded document.

        Args:
            document: Any BaseDocument (real PDF backend or in-memory fake)
            profile: Profile or profile name (auto-detect if None)
            strategy: Parsing strategy override

        Returns:
            ImportResult with source_type "pdf"

        Raises:
            DecodeError: If any page cannot be read
        """
        if isinstance(profile, str):
            profile = self.profile_loader.get_profile(profile)

        page_tokens = self._read_pages(document)

        if profile is None:
            first_page_text = ' '.join(t.text for t in page_tokens[0]) if page_tokens else ''
            profile = self.profile_loader.detect_profile(first_page_text) or self.profile_loader.default_profile()

        reconstructor = LineReconstructor(profile.y_tolerance)
        lines: List[ReconstructedLine] = []
        for page_number, tokens in enumerate(page_tokens, start=1):
            lines.extend(reconstructor.reconstruct(tokens, page_number))
        logger.debug(f"Rebuilt {len(lines)} lines from {len(page_tokens)} pages")

        statement_year = StatementYearResolver(self.today).resolve(lines)

        parser = TransactionGrammarParser(profile, strategy)
        candidates = parser.parse(lines)

        normalizer = TransactionNormalizer(
            statement_year,
            today=self.today,
            max_description_length=profile.max_description_length
        )
        transactions = normalizer.normalize(candidates)

        result = ImportResult(
            transactions=transactions,
            source_type="pdf",
            profile_name=profile.name,
            strategy=parser.selected_strategy,
            statement_year=statement_year,
            currency=profile.currency,
            page_count=len(page_tokens),
            candidate_count=len(candidates),
            duplicates_removed=normalizer.last_duplicates_removed,
        )

        if normalizer.last_rejected:
            result.warnings.append(f"{normalizer.last_rejected} rows skipped: invalid date or description")
        self._check_empty(result)
        return result

    def parse_text(self, text: str, profile: Optional[StatementProfile] = None) -> ImportResult:
        """
        Run the delimited-text parser.

        Args:
            text: CSV/TXT contents
            profile: Only its currency is used (default profile if None)

        Returns:
            ImportResult with source_type "csv"
        """
        profile = profile or self.profile_loader.default_profile()
        parser = DelimitedTextParser(today=self.today)
        transactions = parser.parse(text)

        result = ImportResult(
            transactions=transactions,
            source_type="csv",
            currency=profile.currency,
            candidate_count=len(transactions) + parser.skipped_rows,
        )

        if parser.skipped_rows:
            result.warnings.append(f"{parser.skipped_rows} rows skipped: missing fields or invalid value")
        undated = sum(1 for t in transactions if t.date is None)
        if undated:
            result.warnings.append(f"{undated} rows kept with unrecognized dates")
        self._check_empty(result)
        return result

    def _read_pages(self, document: BaseDocument) -> List[List[PositionedToken]]:
        """Decode every page, 1..N in order. Any page failure aborts the import."""
        page_tokens = []
        for page_number in range(1, document.page_count + 1):
            fragments = document.get_text_fragments(page_number)
            page_tokens.append(extract_tokens(fragments))
        return page_tokens

    @staticmethod
    def _read_text(file_path: Path) -> str:
        """Read a delimited file as UTF-8, falling back to Latin-1 (common in bank exports)."""
        BaseDocument.validate_file(file_path)
        try:
            return file_path.read_text(encoding='utf-8-sig')
        except UnicodeDecodeError:
            logger.info(f"{file_path.name} is not UTF-8, reading as Latin-1")
            return file_path.read_text(encoding='latin-1')
        except OSError as e:
            raise DecodeError(f"Could not read {file_path.name}: {e}") from e

    @staticmethod
    def _check_empty(result: ImportResult) -> None:
        if not result.transactions:
            logger.warning(NO_TRANSACTIONS_WARNING)
            result.warnings.append(NO_TRANSACTIONS_WARNING)

    def _create_error_result(
        self,
        file_path: Path,
        source_type: str,
        error_kind: str,
        error_message: str,
        processing_time: float
    ) -> ImportResult:
        """Create error result."""
        logger.error(error_message)

        log_import_audit(
            file_name=file_path.name,
            source_type=source_type,
            success=False,
            error=error_message
        )

        return ImportResult(
            transactions=[],
            success=False,
            source_type=source_type,
            file_name=file_path.name,
            error_kind=error_kind,
            error_message=error_message,
            processing_time=processing_time
        )
