"""
Fee & Outcome Calculator Module

Deterministic fee, status, processing-time label and estimated arrival for an
accepted transfer. All arithmetic is Decimal and unrounded: the domestic fee is
exactly 0.1% of the amount.
"""

from decimal import Decimal
from datetime import datetime, timedelta
from dataclasses import dataclass
from typing import Optional

from .transfers import TransferType, TransferStatus


DOMESTIC_FEE_RATE = Decimal("0.001")          # 0.1%
INTERNATIONAL_FEE_RATE = Decimal("0.015")     # 1.5%
INTERNATIONAL_MINIMUM_FEE = Decimal("15.00")
INTERNATIONAL_ARRIVAL_DELAY = timedelta(days=3)

DOMESTIC_PROCESSING_TIME = "< 1 minute"
INTERNATIONAL_PROCESSING_TIME = "1-3 business days"


@dataclass(frozen=True)
class TransferQuote:
    """Computed outcome of accepting a transfer"""
    transfer_type: TransferType
    amount: Decimal
    fee: Decimal
    status: TransferStatus
    processing_time: str
    estimated_arrival: Optional[datetime] = None

    @property
    def total(self) -> Decimal:
        return self.amount + self.fee


def calculate_fee(transfer_type: TransferType, amount: Decimal) -> Decimal:
    """
    Fee charged on top of the transferred amount.

    Domestic: 0.1% of the amount.
    International: 1.5% of the amount, never less than 15.00.
    """
    if transfer_type == TransferType.DOMESTIC:
        return amount * DOMESTIC_FEE_RATE
    if transfer_type == TransferType.INTERNATIONAL:
        return max(amount * INTERNATIONAL_FEE_RATE, INTERNATIONAL_MINIMUM_FEE)
    raise ValueError(f"Unsupported transfer type: {transfer_type}")


def quote_transfer(transfer_type: TransferType, amount: Decimal,
                   accepted_at: datetime) -> TransferQuote:
    """
    Compute fee, status, processing time and estimated arrival.

    Args:
        transfer_type: Kind of transfer
        amount: Validated, positive transfer amount
        accepted_at: Acceptance instant; international arrival is 3 days later

    Returns:
        TransferQuote for the accepted transfer
    """
    fee = calculate_fee(transfer_type, amount)

    if transfer_type == TransferType.DOMESTIC:
        return TransferQuote(
            transfer_type=transfer_type,
            amount=amount,
            fee=fee,
            status=TransferStatus.COMPLETED,
            processing_time=DOMESTIC_PROCESSING_TIME
        )

    return TransferQuote(
        transfer_type=transfer_type,
        amount=amount,
        fee=fee,
        status=TransferStatus.PENDING,
        processing_time=INTERNATIONAL_PROCESSING_TIME,
        estimated_arrival=accepted_at + INTERNATIONAL_ARRIVAL_DELAY
    )
