"""
Account Data Module

Client profiles, mutable ledger accounts and the read-only views handed out
to callers. Balances are Decimal and are never mutated outside the ledger.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple
import uuid


@dataclass(frozen=True)
class ClientProfile:
    """Identity and display fields supplied when a client is registered"""
    name: str
    birth_date: str
    document_number: str
    country: str


@dataclass
class Account:
    """
    Ledger entry for one client.
    Only the ledger mutates ``balance``, always while holding its lock.
    """
    profile: ClientProfile
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    balance: Decimal = field(default_factory=lambda: Decimal('0'))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def document_number(self) -> str:
        return self.profile.document_number

    def to_view(self) -> 'AccountView':
        """Copy the current state into an immutable view"""
        return AccountView(
            id=self.id,
            name=self.profile.name,
            birth_date=self.profile.birth_date,
            document_number=self.profile.document_number,
            country=self.profile.country,
            balance=self.balance,
            created_at=self.created_at
        )


@dataclass(frozen=True)
class AccountView:
    """Point-in-time read view of an account"""
    id: str
    name: str
    birth_date: str
    document_number: str
    country: str
    balance: Decimal
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with Decimal and datetime rendered as strings"""
        return {
            "id": self.id,
            "name": self.name,
            "birth_date": self.birth_date,
            "document_number": self.document_number,
            "country": self.country,
            "balance": format_decimal(self.balance),
            "created_at": self.created_at.isoformat()
        }


class SnapshotRecord(NamedTuple):
    """Balance of one account captured by a snapshot"""
    account_id: str
    balance: Decimal


def format_decimal(value: Decimal) -> str:
    """Render a Decimal in full precision without exponent notation"""
    return format(value, 'f')
