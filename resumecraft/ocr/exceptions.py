class RecognitionError(Exception):
    """Raised when OCR on a page image fails."""
