"""
Transaction Rules Module

Credit and debit share one lookup/lock/error path in the ledger and differ
only in the balance rule applied here.
"""

from decimal import Decimal
from enum import Enum
from typing import Union

from .accounts import Account
from .errors import InsufficientFundsError, InvalidAmountError


class TransactionType(Enum):
    """Balance-changing operations supported by the ledger"""
    CREDIT = "credit"
    DEBIT = "debit"

    def apply(self, account: Account, amount: Union[Decimal, int]) -> Decimal:
        """
        Apply this transaction to ``account`` and return the new balance.

        The caller must hold the ledger lock. On failure the balance is left
        exactly as it was.
        """
        amount = validate_amount(amount)

        if self is TransactionType.CREDIT:
            account.balance += amount
        else:
            if account.balance < amount:
                raise InsufficientFundsError(account.id, account.balance, amount)
            account.balance -= amount

        return account.balance


def validate_amount(amount: Union[Decimal, int]) -> Decimal:
    """
    Normalize ``amount`` to Decimal and reject negative or non-finite values
    so a credit can never act as a debit. Integers are accepted; floats are
    not, since they cannot represent most decimal amounts exactly.
    """
    if isinstance(amount, int) and not isinstance(amount, bool):
        amount = Decimal(amount)
    if not isinstance(amount, Decimal):
        raise TypeError(f"Transaction amount must be Decimal or int, got {type(amount).__name__}")
    if not amount.is_finite() or amount < Decimal('0'):
        raise InvalidAmountError(amount)
    return amount
