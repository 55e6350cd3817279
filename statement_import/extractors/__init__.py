"""Document decoding and token extraction."""
from .base_extractor import BaseDocument, make_fragment
from .page_text_extractor import extract_tokens
from .pdfplumber_document import PdfplumberDocument
from .pymupdf_document import PyMuPDFDocument

PDF_BACKENDS = {
    'pdfplumber': PdfplumberDocument,
    'pymupdf': PyMuPDFDocument,
}

__all__ = [
    'BaseDocument',
    'make_fragment',
    'extract_tokens',
    'PdfplumberDocument',
    'PyMuPDFDocument',
    'PDF_BACKENDS',
]
