"""
Account Directory Module

Accounts a transfer can be sent from or to. The directory is seeded once from
a fixed demo set; balances are informational and never debited.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Any, Dict, List

from .currency import Money, Currency


@dataclass(frozen=True)
class Account:
    """Bank account known to the ledger"""
    account_number: str
    name: str
    balance: Money

    @property
    def currency(self) -> Currency:
        return self.balance.currency

    @property
    def has_insufficient_funds(self) -> bool:
        """An account without a positive balance cannot fund any transfer"""
        return not self.balance.is_positive()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return {
            "account_number": self.account_number,
            "name": self.name,
            "balance": str(self.balance.amount),
            "currency": self.currency.code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Account':
        """Convert dictionary to Account"""
        return cls(
            account_number=data["account_number"],
            name=data["name"],
            balance=Money(Decimal(data["balance"]), Currency[data["currency"]]),
        )


def demo_accounts() -> List[Account]:
    """Accounts every fresh ledger starts with"""
    return [
        Account("12345678", "John Doe", Money(Decimal("15000"), Currency.USD)),
        Account("87654321", "Jane Smith", Money(Decimal("8500"), Currency.USD)),
        Account("11223344", "Bob Johnson", Money(Decimal("25000"), Currency.USD)),
    ]
