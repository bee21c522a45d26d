"""
Payment Form State Module

Holds what the user has typed into the payment form and the per-field errors
shown next to each input. One PaymentForm is created per screen and handed to
whatever renders it.
"""

from typing import Any, Callable, Dict, Optional

from .transfers import TransferType, TransferRequest, transfer_request_from_dict
from .validators import ValidationErrors, validate_domestic, validate_international, has_errors
from .logging_config import get_logger


SUBMISSION_FAILED_MESSAGE = "Payment submission failed"


def blank_form_data(transfer_type: TransferType) -> Dict[str, str]:
    """Empty fields for the given kind of transfer"""
    data = {"sourceAccountNumber": "", "amount": ""}
    if transfer_type == TransferType.DOMESTIC:
        data["accountNumber"] = ""
    else:
        data["iban"] = ""
        data["swiftCode"] = ""
    return data


class PaymentForm:
    """Form data, field errors and submission flag for one payment form"""

    def __init__(self, transfer_type: TransferType = TransferType.DOMESTIC):
        self.transfer_type = transfer_type
        self.form_data = blank_form_data(transfer_type)
        self.errors: ValidationErrors = {}
        self.is_submitting = False
        self.logger = get_logger("payments.forms")

    def set_transfer_type(self, transfer_type: TransferType) -> None:
        """Switch form kind; the entered data and errors are discarded"""
        self.transfer_type = transfer_type
        self.form_data = blank_form_data(transfer_type)
        self.errors = {}

    def update_field(self, field: str, value: str) -> None:
        """Store a field value and clear its error once the user edits it"""
        if self.form_data.get(field) == value:
            return
        self.form_data[field] = value
        self.errors.pop(field, None)

    def set_errors(self, errors: ValidationErrors) -> None:
        self.errors = dict(errors)

    def get_field_error(self, field: str) -> Optional[str]:
        return self.errors.get(field)

    def to_request(self) -> TransferRequest:
        return transfer_request_from_dict(self.transfer_type, self.form_data)

    def _required_field_errors(self) -> ValidationErrors:
        errors = {}
        if not self.form_data.get("amount"):
            errors["amount"] = "Amount is required"
        if self.transfer_type == TransferType.DOMESTIC:
            if not self.form_data.get("accountNumber"):
                errors["accountNumber"] = "Account number is required"
        else:
            if not self.form_data.get("iban"):
                errors["iban"] = "IBAN is required"
            if not self.form_data.get("swiftCode"):
                errors["swiftCode"] = "SWIFT code is required"
        return errors

    def validate(self) -> bool:
        """
        Validate the form with the shared transfer validators.

        A missing source account is reported under ``accountNumber`` because
        that is where the account selector shows its error. The other blank
        fields are flagged alongside it.
        """
        if not self.form_data.get("sourceAccountNumber"):
            errors = self._required_field_errors()
            errors["accountNumber"] = "Source account is required"
        elif self.transfer_type == TransferType.DOMESTIC:
            errors = validate_domestic(self.to_request())
        else:
            errors = validate_international(self.to_request())

        self.set_errors(errors)
        return not has_errors(errors)

    def submit(self, on_submit: Callable[[TransferRequest], Any]) -> bool:
        """
        Validate and hand the request to ``on_submit``

        Returns:
            True if the request was handed over without raising
        """
        if not self.validate():
            self.logger.debug(f"Form validation failed: {self.errors}")
            return False

        self.is_submitting = True
        try:
            on_submit(self.to_request())
        except Exception as e:
            self.logger.error(f"Payment submission failed: {e}")
            self.set_errors({"amount": SUBMISSION_FAILED_MESSAGE})
            return False
        finally:
            self.is_submitting = False

        return True

    def reset(self) -> None:
        """Blank the form, keeping the current transfer type"""
        self.form_data = blank_form_data(self.transfer_type)
        self.errors = {}
        self.is_submitting = False
