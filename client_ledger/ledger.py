"""
Client Ledger Engine

Exclusive owner of account state. A single lock covers the whole collection:
every operation holds it from lookup to mutation, so duplicate checks,
guarded debits and snapshot-then-reset are atomic to concurrent callers.
"""

from decimal import Decimal
from typing import Callable, Dict, List, Optional
import threading

from .accounts import Account, AccountView, ClientProfile, SnapshotRecord
from .errors import AccountNotFoundError, DuplicateIdentityError
from .logging_config import get_logger, log_action
from .transactions import TransactionType


logger = get_logger(__name__)


class Ledger:
    """
    Shared, lock-protected collection of client accounts.

    Accounts are kept in insertion order keyed by id, with a secondary index
    on document number.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._accounts: Dict[str, Account] = {}
        self._by_document: Dict[str, str] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)

    def create_account(self, profile: ClientProfile) -> str:
        """
        Register a new client with a zero balance.

        Args:
            profile: Client identity and display fields

        Returns:
            Generated account id

        Raises:
            DuplicateIdentityError: an account with the same document number exists
        """
        with self._lock:
            if profile.document_number in self._by_document:
                log_action(
                    logger, "warning", "Rejected duplicate client",
                    action="create_account", resource=profile.document_number
                )
                raise DuplicateIdentityError(profile.document_number)

            account = Account(profile=profile)
            # uuid4 collisions are not expected, but an id must never be reused
            while account.id in self._accounts:
                account = Account(profile=profile)

            self._accounts[account.id] = account
            self._by_document[profile.document_number] = account.id

        log_action(logger, "info", "Client account created", action="create_account", resource=account.id)
        return account.id

    def find_account(self, account_id: str) -> AccountView:
        """Return a read view of the account including its current balance"""
        with self._lock:
            return self._get(account_id).to_view()

    def list_accounts(self) -> List[AccountView]:
        """Views of all accounts in insertion order"""
        with self._lock:
            return [account.to_view() for account in self._accounts.values()]

    def total_balance(self) -> Decimal:
        """Sum of all account balances"""
        with self._lock:
            return sum((account.balance for account in self._accounts.values()), Decimal('0'))

    def apply_credit(self, account_id: str, amount: Decimal) -> Decimal:
        """Add ``amount`` to the account balance and return the new balance"""
        return self.apply_transaction(TransactionType.CREDIT, account_id, amount)

    def apply_debit(self, account_id: str, amount: Decimal) -> Decimal:
        """
        Subtract ``amount`` from the account balance and return the new balance.

        Raises InsufficientFundsError without touching the balance when the
        balance is lower than ``amount``.
        """
        return self.apply_transaction(TransactionType.DEBIT, account_id, amount)

    def apply_transaction(self, transaction_type: TransactionType, account_id: str,
                          amount: Decimal) -> Decimal:
        """Shared lookup/lock/error path for credits and debits"""
        with self._lock:
            try:
                new_balance = transaction_type.apply(self._get(account_id), amount)
            except ValueError as e:
                log_action(
                    logger, "warning", f"{transaction_type.value.capitalize()} rejected: {e}",
                    action=transaction_type.value, resource=account_id
                )
                raise

        log_action(
            logger, "info", f"{transaction_type.value.capitalize()} applied",
            action=transaction_type.value, resource=account_id,
            extra={"amount": str(amount), "new_balance": str(new_balance)}
        )
        return new_balance

    def snapshot_and_reset(
        self,
        persist: Optional[Callable[[List[SnapshotRecord]], object]] = None
    ) -> List[SnapshotRecord]:
        """
        Capture every account's balance, then zero all balances.

        Args:
            persist: Called with the captured records while the lock is still
                held. Balances are reset only if it returns normally; if it
                raises, no balance is touched and the exception propagates.

        Returns:
            Captured (account_id, balance) records in insertion order
        """
        with self._lock:
            records = [
                SnapshotRecord(account.id, account.balance)
                for account in self._accounts.values()
            ]

            if persist is not None:
                persist(list(records))

            for account in self._accounts.values():
                account.balance = Decimal('0')

        log_action(
            logger, "info", "Balances captured and reset",
            action="snapshot_and_reset", extra={"accounts": len(records)}
        )
        return records

    def _get(self, account_id: str) -> Account:
        """Look up an account; the caller must hold the lock"""
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account
