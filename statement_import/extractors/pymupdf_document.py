"""PDF text-layer decoding using PyMuPDF."""
import logging
from pathlib import Path
from typing import List

import fitz  # PyMuPDF

from .base_extractor import BaseDocument, make_fragment
from ..errors import DecodeError

logger = logging.getLogger(__name__)


class PyMuPDFDocument(BaseDocument):
    """
    Expose a native PDF as positioned word fragments using PyMuPDF.

    Handles some PDFs with font/encoding quirks better than pdfplumber.
    """

    def __init__(self, file_path: Path):
        super().__init__()
        self.file_path = Path(file_path)
        self.validate_file(self.file_path)

        try:
            self._doc = fitz.open(self.file_path)
        except Exception as e:
            logger.error(f"Failed to open PDF {self.file_path.name}: {e}")
            raise DecodeError(f"Could not open PDF: {e}") from e

        if self._doc.needs_pass:
            self._doc.close()
            raise DecodeError(f"PDF is password protected: {self.file_path.name}")

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def get_text_fragments(self, page_number: int) -> List[dict]:
        """Get word fragments of one page (1-based)."""
        if not 1 <= page_number <= self.page_count:
            raise DecodeError(f"Page {page_number} out of range (1-{self.page_count})", page_number)

        try:
            page = self._doc.load_page(page_number - 1)
            height = float(page.rect.height)
            # (x0, y0, x1, y1, word, block_no, line_no, word_no), top-left origin
            words = page.get_text("words")
        except Exception as e:
            logger.error(f"Failed to read page {page_number} of {self.file_path.name}: {e}")
            raise DecodeError(f"Could not read page {page_number}: {e}", page_number) from e

        return [make_fragment(word[4], word[0], height - float(word[3])) for word in words]

    def close(self) -> None:
        doc = getattr(self, '_doc', None)
        if doc is not None:
            doc.close()
            self._doc = None
