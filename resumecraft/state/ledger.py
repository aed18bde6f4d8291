import threading

from resumecraft.logging.logger import Log
from resumecraft.state.exceptions import InsufficientCreditsError


class CreditLedger:
    """Non-negative credit balance that gates expensive operations."""

    def __init__(self, balance: int = 100) -> None:
        if balance < 0:
            raise ValueError(f"Initial balance must be non-negative, got {balance}")
        self._balance = balance
        self._lock = threading.Lock()

    @property
    def balance(self) -> int:
        return self._balance

    def can_afford(self, cost: int) -> bool:
        return self._balance >= cost

    def ensure(self, cost: int) -> None:
        """Raise InsufficientCreditsError unless ``cost`` is covered."""
        if not self.can_afford(cost):
            raise InsufficientCreditsError(balance=self._balance, required=cost)

    def debit(self, cost: int) -> int:
        """Atomically check and subtract ``cost``; return the new balance."""
        if cost < 0:
            raise ValueError(f"Debit must be non-negative, got {cost}")
        with self._lock:
            if self._balance < cost:
                raise InsufficientCreditsError(balance=self._balance, required=cost)
            self._balance -= cost
            balance = self._balance
        Log.info(f"Debited {cost} credits, balance now {balance}")
        return balance
