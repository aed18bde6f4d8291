class RenderError(Exception):
    """Raised when a PDF page cannot be opened or rasterized."""
