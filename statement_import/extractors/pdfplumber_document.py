"""PDF text-layer decoding using pdfplumber."""
import logging
from pathlib import Path
from typing import List, Optional

import pdfplumber

from .base_extractor import BaseDocument, make_fragment
from ..errors import DecodeError

logger = logging.getLogger(__name__)


class PdfplumberDocument(BaseDocument):
    """
    Expose a native (text) PDF as positioned word fragments using pdfplumber.

    pdfplumber reports word boxes with a top-left origin; fragments are
    converted to page space (bottom-left origin) using the word's bottom
    edge as baseline.
    """

    def __init__(self, file_path: Path, text_kwargs: Optional[dict] = None):
        """
        Open the PDF.

        Args:
            file_path: Path to PDF file
            text_kwargs: Extra keyword args for ``page.extract_words``
                         (e.g. x_tolerance)

        Raises:
            DecodeError: If the file cannot be opened as a PDF
        """
        super().__init__()
        self.file_path = Path(file_path)
        self.text_kwargs = text_kwargs or {}
        self.validate_file(self.file_path)

        self._pdf = None
        try:
            self._pdf = pdfplumber.open(self.file_path)
            self._page_count = len(self._pdf.pages)
        except Exception as e:
            self.close()
            logger.error(f"Failed to open PDF {self.file_path.name}: {e}")
            raise DecodeError(f"Could not open PDF: {e}") from e

        logger.debug(f"Opened {self.file_path.name} with pdfplumber ({self._page_count} pages)")

    @property
    def page_count(self) -> int:
        return self._page_count

    def get_text_fragments(self, page_number: int) -> List[dict]:
        """
        Get word fragments of one page.

        Args:
            page_number: 1-based page number

        Returns:
            List of {"text", "transform"} dictionaries

        Raises:
            DecodeError: If the page cannot be read
        """
        if not 1 <= page_number <= self._page_count:
            raise DecodeError(f"Page {page_number} out of range (1-{self._page_count})", page_number)

        try:
            page = self._pdf.pages[page_number - 1]
            words = page.extract_words(**self.text_kwargs)
            height = float(page.height)
        except Exception as e:
            logger.error(f"Failed to read page {page_number} of {self.file_path.name}: {e}")
            raise DecodeError(f"Could not read page {page_number}: {e}", page_number) from e

        fragments = [
            make_fragment(word['text'], word['x0'], height - float(word['bottom']))
            for word in words
        ]
        logger.debug(f"Page {page_number}: {len(fragments)} word fragments")
        return fragments

    def close(self) -> None:
        """Close the underlying PDF file."""
        pdf = getattr(self, '_pdf', None)
        if pdf is not None:
            pdf.close()
            self._pdf = None
