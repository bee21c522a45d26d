"""
Currency Module

ISO 4217 currency codes and an immutable Money value for account balances.
NEVER uses float for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, getcontext
from dataclasses import dataclass
from enum import Enum

# Set global decimal context for financial precision
getcontext().prec = 28


class Currency(Enum):
    """ISO 4217 Currency Codes with precision info"""
    USD = ("USD", 2)  # US Dollar, 2 decimal places

    def __init__(self, code: str, precision: int):
        self.code = code
        self.precision = precision


@dataclass(frozen=True)
class Money:
    """
    Immutable money representation with currency and proper precision.
    """
    amount: Decimal
    currency: Currency

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        # Round to currency precision
        rounded = self.amount.quantize(
            Decimal('0.1') ** self.currency.precision,
            rounding=ROUND_HALF_UP
        )
        object.__setattr__(self, 'amount', rounded)

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > Decimal('0')
