class ExportError(Exception):
    """Raised when a generated resume cannot be written as PDF."""
