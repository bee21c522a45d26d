"""
Transfer Validation Module

Field validators and per-transfer-type composite validators. This is the only
place the account, amount, IBAN and SWIFT rules are defined; the payment form,
the orchestrator and the REST API all call these functions.

Every validator takes the raw field value and returns an error message, or
None when the value is valid. Validators never raise for bad input.
"""

from decimal import Decimal, InvalidOperation
from typing import Dict, Optional
import re

from .transfers import DomesticTransferRequest, InternationalTransferRequest


ValidationErrors = Dict[str, str]

MIN_ACCOUNT_NUMBER_LENGTH = 8
MAX_ACCOUNT_NUMBER_LENGTH = 20
MAX_TRANSFER_AMOUNT = Decimal("100000")
MIN_IBAN_LENGTH = 15
MAX_IBAN_LENGTH = 34

_DIGITS = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
_WHITESPACE = re.compile(r"\s")
_IBAN = re.compile(r"[A-Z]{2}[0-9]{2}[A-Z0-9]+")
_SWIFT_CODE = re.compile(r"[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}([A-Z0-9]{3})?")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def parse_amount(amount: Optional[str]) -> Optional[Decimal]:
    """
    Parse a signed decimal string independently of locale.

    Returns None for anything that is not a finite decimal number. ``-10``
    parses; range checks are left to the caller.
    """
    if amount is None:
        return None
    text = amount.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def normalize_iban(iban: str) -> str:
    """Strip all whitespace and upper-case"""
    return _WHITESPACE.sub("", iban).upper()


def normalize_swift_code(swift_code: str) -> str:
    """Strip all whitespace and upper-case"""
    return _WHITESPACE.sub("", swift_code).upper()


def validate_account_number(account_number: Optional[str]) -> Optional[str]:
    if _is_blank(account_number):
        return "Account number is required"

    if not _DIGITS.fullmatch(account_number):
        return "Account number must contain only numbers"

    if not MIN_ACCOUNT_NUMBER_LENGTH <= len(account_number) <= MAX_ACCOUNT_NUMBER_LENGTH:
        return "Account number must be between 8-20 digits"

    return None


def validate_amount(amount: Optional[str]) -> Optional[str]:
    if _is_blank(amount):
        return "Amount is required"

    value = parse_amount(amount)
    if value is None:
        return "Amount must be a valid number"

    if value <= 0:
        return "Amount must be greater than zero"

    if value > MAX_TRANSFER_AMOUNT:
        return "Amount cannot exceed $100,000"

    return None


def validate_iban(iban: Optional[str]) -> Optional[str]:
    if _is_blank(iban):
        return "IBAN is required"

    clean_iban = normalize_iban(iban)

    # Too long is reported before too short, both before format
    if len(clean_iban) > MAX_IBAN_LENGTH:
        return "IBAN cannot exceed 34 characters"

    if len(clean_iban) < MIN_IBAN_LENGTH:
        return "IBAN must be at least 15 characters"

    if not _IBAN.fullmatch(clean_iban):
        return "Invalid IBAN format"

    return None


def validate_swift_code(swift_code: Optional[str]) -> Optional[str]:
    if _is_blank(swift_code):
        return "SWIFT code is required"

    # 4-letter institution, 2-letter country, 2 location, optional 3 branch
    if not _SWIFT_CODE.fullmatch(normalize_swift_code(swift_code)):
        return "Invalid SWIFT code format (e.g., AAAABBCC123)"

    return None


def _collect(**results: Optional[str]) -> ValidationErrors:
    return {name: message for name, message in results.items() if message}


def validate_domestic(request: DomesticTransferRequest) -> ValidationErrors:
    """Validate recipient account number and amount"""
    return _collect(
        accountNumber=validate_account_number(request.account_number),
        amount=validate_amount(request.amount),
    )


def validate_international(request: InternationalTransferRequest) -> ValidationErrors:
    """
    Validate amount, IBAN and SWIFT code.

    The source account is picked from existing accounts rather than typed, so
    it is checked by the orchestrator, not here.
    """
    return _collect(
        amount=validate_amount(request.amount),
        iban=validate_iban(request.iban),
        swiftCode=validate_swift_code(request.swift_code),
    )


def has_errors(errors: Dict[str, Optional[str]]) -> bool:
    """True if any field carries a non-empty message"""
    return any(message for message in errors.values())
