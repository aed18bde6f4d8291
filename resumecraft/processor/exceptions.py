class ProcessorError(Exception):
    """Base exception for all extraction-pipeline errors."""


class ExtractionInProgressError(ProcessorError):
    """Raised when an extraction is started while another one is running."""


class ExtractionCancelledError(ProcessorError):
    """Raised inside a run when cancellation has been requested."""
