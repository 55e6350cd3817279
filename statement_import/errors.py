"""Exception types raised by the statement import core."""


class StatementImportError(Exception):
    """Base class for all statement import errors."""
    pass


class DecodeError(StatementImportError):
    """The document could not be opened or one of its pages could not be read.

    Fatal for the whole import: no partial results are returned, since a
    missing page could silently drop real transactions.
    """

    def __init__(self, message: str, page_number: int = None):
        super().__init__(message)
        self.page_number = page_number


class UnsupportedFormatError(StatementImportError):
    """The file type is not one the import pipeline knows how to read."""
    pass


class ProfileNotFoundError(StatementImportError):
    """No statement profile is registered under the requested name."""
    pass
