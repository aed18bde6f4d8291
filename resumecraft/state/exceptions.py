class StateError(Exception):
    """Base exception for session state errors."""


class InsufficientCreditsError(StateError):
    """Raised when the ledger balance cannot cover an operation's cost."""

    def __init__(self, balance: int, required: int) -> None:
        super().__init__(
            f"Not enough credits: {required} required, {balance} available"
        )
        self.balance = balance
        self.required = required


class ResumeNotFoundError(StateError):
    """Raised when no stored resume has the requested id."""
