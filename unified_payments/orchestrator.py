"""
Transfer Orchestrator Module

Takes a raw transfer request through validation, the account check and the
outcome policy, and records the transaction when all three pass:

    validating -> account check -> policy check -> accepted

Any step can reject the request. Rejections never touch the ledger, so a
caller may safely retry. Only acceptance appends a transaction.
"""

from datetime import datetime, timezone
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from .errors import (
    PaymentError, TransferValidationError, RecipientNotFoundError,
    SourceAccountNotFoundError, TransferFailedError, ComplianceBlockedError,
    InternalError
)
from .fees import quote_transfer
from .ledger import TransferLedger
from .policy import OutcomePolicy, OutcomeDecision, SimulatedOutcomePolicy
from .transfers import (
    TransferRequest, DomesticTransferRequest, InternationalTransferRequest,
    Transaction, TransferResponse, TransferType
)
from .validators import (
    validate_account_number, validate_domestic, validate_international,
    has_errors, parse_amount, normalize_iban, normalize_swift_code
)
from .logging_config import get_logger, log_action


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SubmissionResult:
    """Terminal state of a submission: a response or an error, never both"""
    response: Optional[TransferResponse] = None
    error: Optional[PaymentError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_envelope(self) -> Dict[str, Any]:
        if self.error is not None:
            return self.error.to_envelope()
        return {"success": True, "data": self.response.to_dict()}


class TransferOrchestrator:
    """
    Validates, checks and accepts transfer requests.

    Holds no state of its own between calls; the ledger, outcome policy and
    clock are injected.
    """

    def __init__(
        self,
        ledger: TransferLedger,
        policy: Optional[OutcomePolicy] = None,
        clock: Optional[Clock] = None
    ):
        self.ledger = ledger
        self.policy = policy or SimulatedOutcomePolicy()
        self.clock = clock or utc_now
        self.logger = get_logger("payments.orchestrator")

    def submit(self, request: TransferRequest) -> SubmissionResult:
        """
        Submit a transfer request

        Args:
            request: Domestic or international transfer request

        Returns:
            SubmissionResult holding the TransferResponse on acceptance, or the
            PaymentError describing the rejection
        """
        try:
            transaction = self._process(request)
        except PaymentError as e:
            log_action(
                self.logger, "warning", f"Transfer rejected: {e.message}",
                action="submit_transfer", resource=f"transfer:{request.transfer_type.value}",
                extra={"code": e.code.value, "details": e.details}
            )
            return SubmissionResult(error=e)
        except Exception:
            log_action(
                self.logger, "error", "Unexpected error while processing transfer",
                action="submit_transfer", resource=f"transfer:{request.transfer_type.value}",
                exc_info=True
            )
            return SubmissionResult(error=InternalError())

        log_action(
            self.logger, "info", f"Transfer accepted: {transaction.transfer_type.value}",
            action="submit_transfer", resource=f"transaction:{transaction.id}",
            extra={
                "transaction_id": transaction.id,
                "amount": str(transaction.amount),
                "fee": str(transaction.fee),
                "status": transaction.status.value
            }
        )
        return SubmissionResult(response=TransferResponse.from_transaction(transaction))

    def _process(self, request: TransferRequest) -> Transaction:
        if isinstance(request, DomesticTransferRequest):
            return self._process_domestic(request)
        if isinstance(request, InternationalTransferRequest):
            return self._process_international(request)
        raise TypeError(f"Unsupported transfer request: {type(request).__name__}")

    def _process_domestic(self, request: DomesticTransferRequest) -> Transaction:
        errors = validate_domestic(request)
        if has_errors(errors):
            raise TransferValidationError(details=errors)

        recipient = self.ledger.get_account(request.account_number)
        if recipient is None:
            raise RecipientNotFoundError()

        amount = parse_amount(request.amount)
        self._apply_policy(TransferType.DOMESTIC, amount)

        accepted_at = self.clock()
        quote = quote_transfer(TransferType.DOMESTIC, amount, accepted_at)
        return self.ledger.append_transaction(Transaction(
            transfer_type=TransferType.DOMESTIC,
            amount=quote.amount,
            fee=quote.fee,
            status=quote.status,
            timestamp=accepted_at,
            processing_time=quote.processing_time,
            source_account_number=request.source_account_number,
            account_number=request.account_number,
            recipient_name=recipient.name
        ))

    def _process_international(self, request: InternationalTransferRequest) -> Transaction:
        errors = {}
        source_error = validate_account_number(request.source_account_number)
        if source_error:
            errors["sourceAccountNumber"] = source_error
        errors.update(validate_international(request))
        if has_errors(errors):
            raise TransferValidationError(details=errors)

        if not self.ledger.account_exists(request.source_account_number):
            raise SourceAccountNotFoundError()

        amount = parse_amount(request.amount)
        self._apply_policy(TransferType.INTERNATIONAL, amount)

        accepted_at = self.clock()
        quote = quote_transfer(TransferType.INTERNATIONAL, amount, accepted_at)
        return self.ledger.append_transaction(Transaction(
            transfer_type=TransferType.INTERNATIONAL,
            amount=quote.amount,
            fee=quote.fee,
            status=quote.status,
            timestamp=accepted_at,
            processing_time=quote.processing_time,
            source_account_number=request.source_account_number,
            iban=normalize_iban(request.iban),
            swift_code=normalize_swift_code(request.swift_code),
            estimated_arrival=quote.estimated_arrival
        ))

    def _apply_policy(self, transfer_type: TransferType, amount: Decimal) -> None:
        decision = self.policy.decide(transfer_type, amount)
        if decision == OutcomeDecision.TECHNICAL_FAILURE:
            raise TransferFailedError()
        if decision == OutcomeDecision.COMPLIANCE_BLOCK:
            raise ComplianceBlockedError()
