class GenerationError(Exception):
    """Base exception for generative-text requests."""


class NoResumeSelectedError(GenerationError):
    """Raised when a request has no resume text to work from."""


class NoJobDescriptionError(GenerationError):
    """Raised when the job description is missing or blank."""


class GenerationFailedError(GenerationError):
    """Raised when the provider call fails or returns an unusable reply."""


class GenerationNetworkError(GenerationFailedError):
    """Raised when the provider cannot be reached (connection, timeout)."""


class MalformedInsightsError(GenerationError):
    """Raised when a structured reply cannot be parsed or lacks fields."""
