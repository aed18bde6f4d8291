class DocumentError(Exception):
    """Base exception for all document-source errors."""


class InvalidFormatError(DocumentError):
    """Raised when a source file does not declare the accepted document type."""


class DocumentLoadError(DocumentError):
    """Raised when a document's bytes cannot be opened."""


class DocumentNotReadyError(DocumentError):
    """Raised on page access before the page count has been resolved."""


class PageOutOfRangeError(DocumentError):
    """Raised when a page number falls outside 1..page_count."""


class HandleReleasedError(DocumentError):
    """Raised when reading from a display handle that has been released."""
