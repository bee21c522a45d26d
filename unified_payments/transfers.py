"""
Transfer Models Module

Transfer requests (a tagged variant of domestic and international requests),
the immutable Transaction record kept by the ledger, and the TransferResponse
projection returned to callers.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Union
from enum import Enum


class TransferType(Enum):
    """Kinds of transfer"""
    DOMESTIC = "domestic"
    INTERNATIONAL = "international"


class TransferStatus(Enum):
    """Status of an accepted transfer"""
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"


@dataclass(frozen=True)
class DomesticTransferRequest:
    """Transfer to another account held at this bank"""
    account_number: Optional[str]
    amount: Optional[str]
    source_account_number: Optional[str] = None
    transfer_type: TransferType = field(default=TransferType.DOMESTIC, init=False)


@dataclass(frozen=True)
class InternationalTransferRequest:
    """Cross-border transfer to an IBAN routed through a SWIFT/BIC code"""
    source_account_number: Optional[str]
    amount: Optional[str]
    iban: Optional[str]
    swift_code: Optional[str]
    transfer_type: TransferType = field(default=TransferType.INTERNATIONAL, init=False)


TransferRequest = Union[DomesticTransferRequest, InternationalTransferRequest]


def transfer_request_from_dict(transfer_type: TransferType, data: Dict[str, Any]) -> TransferRequest:
    """Build a transfer request from camelCase form or JSON fields"""
    if transfer_type == TransferType.DOMESTIC:
        return DomesticTransferRequest(
            account_number=data.get("accountNumber"),
            amount=data.get("amount"),
            source_account_number=data.get("sourceAccountNumber") or None
        )
    if transfer_type == TransferType.INTERNATIONAL:
        return InternationalTransferRequest(
            source_account_number=data.get("sourceAccountNumber"),
            amount=data.get("amount"),
            iban=data.get("iban"),
            swift_code=data.get("swiftCode")
        )
    raise ValueError(f"Unsupported transfer type: {transfer_type}")


@dataclass(frozen=True)
class Transaction:
    """
    Accepted transfer as recorded in the ledger.

    ``id`` and ``sequence`` are assigned by the ledger when the transaction is
    appended; a Transaction is never modified afterwards.
    """
    transfer_type: TransferType
    amount: Decimal
    fee: Decimal
    status: TransferStatus
    timestamp: datetime
    processing_time: str
    source_account_number: Optional[str] = None
    account_number: Optional[str] = None
    recipient_name: Optional[str] = None
    iban: Optional[str] = None
    swift_code: Optional[str] = None
    estimated_arrival: Optional[datetime] = None
    id: Optional[str] = None
    sequence: Optional[int] = None

    @property
    def total(self) -> Decimal:
        """Amount debited from the sender, fee included"""
        return self.amount + self.fee

    def with_identity(self, transaction_id: str, sequence: int) -> 'Transaction':
        """Copy of this transaction carrying its ledger identity"""
        return replace(self, id=transaction_id, sequence=sequence)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return {
            "id": self.id,
            "sequence": self.sequence,
            "transfer_type": self.transfer_type.value,
            "amount": str(self.amount),
            "fee": str(self.fee),
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "processing_time": self.processing_time,
            "source_account_number": self.source_account_number,
            "account_number": self.account_number,
            "recipient_name": self.recipient_name,
            "iban": self.iban,
            "swift_code": self.swift_code,
            "estimated_arrival": self.estimated_arrival.isoformat() if self.estimated_arrival else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """Convert dictionary to Transaction"""
        estimated_arrival = None
        if data.get("estimated_arrival"):
            estimated_arrival = datetime.fromisoformat(data["estimated_arrival"])

        return cls(
            id=data["id"],
            sequence=data["sequence"],
            transfer_type=TransferType(data["transfer_type"]),
            amount=Decimal(data["amount"]),
            fee=Decimal(data["fee"]),
            status=TransferStatus(data["status"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            processing_time=data["processing_time"],
            source_account_number=data.get("source_account_number"),
            account_number=data.get("account_number"),
            recipient_name=data.get("recipient_name"),
            iban=data.get("iban"),
            swift_code=data.get("swift_code"),
            estimated_arrival=estimated_arrival,
        )

    def to_api_dict(self) -> Dict[str, Any]:
        """camelCase representation used by the REST API"""
        result = {
            "id": self.id,
            "type": self.transfer_type.value,
            "sourceAccountNumber": self.source_account_number,
            "accountNumber": self.account_number,
            "recipientName": self.recipient_name,
            "iban": self.iban,
            "swiftCode": self.swift_code,
            "amount": self.amount,
            "fee": self.fee,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "processingTime": self.processing_time,
            "estimatedArrival": self.estimated_arrival.isoformat() if self.estimated_arrival else None,
        }
        return {k: v for k, v in result.items() if v is not None}


@dataclass(frozen=True)
class TransferResponse:
    """What the caller sees for an accepted transfer"""
    transaction_id: str
    transfer_type: TransferType
    status: TransferStatus
    amount: Decimal
    fee: Decimal
    total: Decimal
    processing_time: str
    timestamp: datetime
    recipient: Dict[str, str]
    estimated_arrival: Optional[datetime] = None

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> 'TransferResponse':
        if transaction.transfer_type == TransferType.DOMESTIC:
            recipient = {
                "accountNumber": transaction.account_number,
                "name": transaction.recipient_name,
            }
        else:
            recipient = {
                "iban": transaction.iban,
                "swiftCode": transaction.swift_code,
            }

        return cls(
            transaction_id=transaction.id,
            transfer_type=transaction.transfer_type,
            status=transaction.status,
            amount=transaction.amount,
            fee=transaction.fee,
            total=transaction.total,
            processing_time=transaction.processing_time,
            timestamp=transaction.timestamp,
            recipient=recipient,
            estimated_arrival=transaction.estimated_arrival,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "transactionId": self.transaction_id,
            "type": self.transfer_type.value,
            "status": self.status.value,
            "amount": self.amount,
            "fee": self.fee,
            "total": self.total,
            "processingTime": self.processing_time,
            "timestamp": self.timestamp.isoformat(),
            "recipient": dict(self.recipient),
        }
        if self.estimated_arrival:
            result["estimatedArrival"] = self.estimated_arrival.isoformat()
        return result
