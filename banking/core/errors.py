class BankingError(Exception):
    """Base class for every error the transfer service raises."""


class AccountNotFoundError(BankingError):
    """Raised when a customer id is missing from the store."""


class InsufficientFundsError(BankingError):
    """Raised when a transfer would drop the debited balance below zero."""


class InvalidTransferError(BankingError, ValueError):
    """Raised when transfer arguments are rejected before touching the store."""


class StorageError(BankingError):
    """Raised when the underlying database connection or transaction fails."""
