"""
Ledger error hierarchy.

Every error is recoverable and carries the id, document number or path the
caller needs to act on it.
"""

from decimal import Decimal
from pathlib import Path
from typing import Union


class LedgerError(ValueError):
    """Base exception for all ledger errors"""


class DuplicateIdentityError(LedgerError):
    """Raised when an account with the same document number already exists"""

    def __init__(self, document_number: str):
        self.document_number = document_number
        super().__init__(f"Client with document: '{document_number}' already exists")


class AccountNotFoundError(LedgerError):
    """Raised when an operation references an unknown account id"""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Client with id: '{account_id}' doesn't exist")


class InsufficientFundsError(LedgerError):
    """Raised when a debit exceeds the current balance"""

    def __init__(self, account_id: str, balance: Decimal, amount: Decimal):
        self.account_id = account_id
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Insufficient balance to debit! Client '{account_id}' has {balance}, requested {amount}"
        )


class InvalidAmountError(LedgerError):
    """Raised when a transaction amount is negative"""

    def __init__(self, amount: Decimal):
        self.amount = amount
        super().__init__(f"Transaction amount must not be negative, got {amount}")


class StorageFailureError(LedgerError):
    """Raised when the snapshot directory or file cannot be written"""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Snapshot storage failure at '{self.path}': {reason}")
