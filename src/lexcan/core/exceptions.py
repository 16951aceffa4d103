class LexParsingError(Exception):
    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


class TransformError(Exception):
    """
    Raised when the XSLT to HTML to markdown rendering of a document fails.

    Callers treat this as recoverable at the document level and fall back to
    plain text extraction.
    """

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


class CorpusNotFoundError(FileNotFoundError):
    """Raised when one of the expected corpus directories is missing."""

    def __init__(self, message: str, directory: str = None):
        super().__init__(message)
        self.directory = directory
