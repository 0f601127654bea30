"""
Domain-specific exceptions for the gift card ledger.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base exception for all gift card ledger errors."""
    pass


class InvalidAmountError(LedgerError):
    """Raised when an amount is missing, malformed, zero or negative."""
    pass


class InsufficientBalanceError(LedgerError):
    """
    Raised when a transaction would drive the balance below zero.

    Carries the balance that was actually available so callers can show it.
    """

    def __init__(self, available: Decimal, requested: Decimal, currency: str):
        self.available = available
        self.requested = requested
        self.currency = currency
        super().__init__(f"Insufficient balance. Available: {available:.2f} {currency}")


class TransactionNotFoundError(LedgerError):
    """Raised when a transaction does not exist or is already deleted."""
    pass


class LedgerStorageError(LedgerError):
    """Raised when the database rejects a ledger write for any other reason."""
    pass
