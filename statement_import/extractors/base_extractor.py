"""Base document abstract class."""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from ..config.settings import MAX_FILE_SIZE_MB
from ..errors import DecodeError


class BaseDocument(ABC):
    """
    Abstract page-decoding collaborator.

    A document exposes its page count and, per page, the raw positioned text
    fragments of its text layer::

        {"text": "14/11", "transform": (1, 0, 0, 1, 32.0, 712.5)}

    The transform is a 6-element affine matrix; elements 4 and 5 are the
    translation (x, y) in page space with the origin at the bottom-left.

    Subclasses wrap a concrete PDF library. Anything that implements this
    interface (including in-memory fakes) can be fed to the import pipeline.
    """

    def __init__(self):
        """Initialize the document."""
        self.name = self.__class__.__name__

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""
        pass

    @abstractmethod
    def get_text_fragments(self, page_number: int) -> List[dict]:
        """
        Get the positioned text fragments of one page.

        Args:
            page_number: 1-based page number

        Returns:
            List of {"text", "transform"} dictionaries

        Raises:
            DecodeError: If the page cannot be read
        """
        pass

    def close(self) -> None:
        """Release underlying resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @staticmethod
    def validate_file(file_path: Path) -> None:
        """
        Validate that the file exists, is non-empty and within size limits.

        Args:
            file_path: Path to the document file

        Raises:
            DecodeError: If the file cannot be used
        """
        if not file_path.exists():
            raise DecodeError(f"File not found: {file_path}")

        if not file_path.is_file():
            raise DecodeError(f"Not a file: {file_path}")

        size = file_path.stat().st_size
        if size == 0:
            raise DecodeError(f"File is empty: {file_path}")

        if size > MAX_FILE_SIZE_MB * 1024 * 1024:
            raise DecodeError(f"File is larger than {MAX_FILE_SIZE_MB} MB: {file_path}")


def make_fragment(text: str, x: float, y: float) -> dict:
    """Build a fragment with a pure translation transform."""
    return {"text": text, "transform": (1.0, 0.0, 0.0, 1.0, float(x), float(y))}
