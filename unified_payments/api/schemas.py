"""
Pydantic schemas for API requests
"""

from typing import Optional, Union
from pydantic import BaseModel, Field

from ..transfers import DomesticTransferRequest, InternationalTransferRequest


def _as_text(value: Union[str, int, float, None]) -> Optional[str]:
    """Amounts may arrive as JSON numbers; validators work on text"""
    if value is None or isinstance(value, str):
        return value
    return str(value)


# Transfer schemas
class DomesticTransferBody(BaseModel):
    account_number: Optional[str] = Field(None, alias="accountNumber")
    amount: Optional[Union[str, int, float]] = Field(None, description="Decimal amount as string")
    source_account_number: Optional[str] = Field(None, alias="sourceAccountNumber")

    def to_request(self) -> DomesticTransferRequest:
        return DomesticTransferRequest(
            account_number=self.account_number,
            amount=_as_text(self.amount),
            source_account_number=self.source_account_number or None
        )


class InternationalTransferBody(BaseModel):
    source_account_number: Optional[str] = Field(None, alias="sourceAccountNumber")
    amount: Optional[Union[str, int, float]] = Field(None, description="Decimal amount as string")
    iban: Optional[str] = None
    swift_code: Optional[str] = Field(None, alias="swiftCode")

    def to_request(self) -> InternationalTransferRequest:
        return InternationalTransferRequest(
            source_account_number=self.source_account_number,
            amount=_as_text(self.amount),
            iban=self.iban,
            swift_code=self.swift_code
        )
