"""
Error Taxonomy Module

Every failure a caller can observe is a PaymentError carrying a stable code,
an HTTP status and a human-readable message. Validation failures also carry a
per-field details map.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes surfaced in the error envelope"""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    RECIPIENT_NOT_FOUND = "RECIPIENT_NOT_FOUND"
    SOURCE_ACCOUNT_NOT_FOUND = "SOURCE_ACCOUNT_NOT_FOUND"
    TRANSFER_FAILED = "TRANSFER_FAILED"
    COMPLIANCE_BLOCKED = "COMPLIANCE_BLOCKED"
    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_FOUND = "NOT_FOUND"


class PaymentError(Exception):
    """Base class for errors reported to callers"""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None,
                 details: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_envelope(self) -> Dict[str, Any]:
        """Render as the error envelope"""
        envelope: Dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code.value,
        }
        if self.details:
            envelope["details"] = dict(self.details)
        return envelope


class TransferValidationError(PaymentError):
    """One or more request fields failed validation"""
    code = ErrorCode.VALIDATION_ERROR
    status_code = 400
    default_message = "Validation failed"


class NotFoundError(PaymentError):
    """A referenced resource does not exist"""
    code = ErrorCode.NOT_FOUND
    status_code = 404
    default_message = "Endpoint not found"


class EndpointNotFoundError(NotFoundError):
    pass


class AccountNotFoundError(NotFoundError):
    code = ErrorCode.ACCOUNT_NOT_FOUND
    default_message = "Account not found"


class RecipientNotFoundError(NotFoundError):
    code = ErrorCode.RECIPIENT_NOT_FOUND
    default_message = "Recipient account not found"


class SourceAccountNotFoundError(NotFoundError):
    code = ErrorCode.SOURCE_ACCOUNT_NOT_FOUND
    default_message = "Source account not found"


class TransactionNotFoundError(NotFoundError):
    code = ErrorCode.TRANSACTION_NOT_FOUND
    default_message = "Transaction not found"


class PolicyRejection(PaymentError):
    """Transfer rejected by the outcome policy; the caller may retry"""


class TransferFailedError(PolicyRejection):
    code = ErrorCode.TRANSFER_FAILED
    status_code = 500
    default_message = "Transfer failed due to technical issues"


class ComplianceBlockedError(PolicyRejection):
    code = ErrorCode.COMPLIANCE_BLOCKED
    status_code = 400
    default_message = "Transfer blocked by compliance checks"


class TransportError(PaymentError):
    """The API could not be reached or answered with an unreadable body"""
    code = ErrorCode.NETWORK_ERROR
    status_code = 503
    default_message = "Network error. Please check your connection."


class InternalError(PaymentError):
    """Unexpected fault; the detail is logged, never returned"""
    code = ErrorCode.INTERNAL_ERROR
    status_code = 500
    default_message = "Internal server error"
