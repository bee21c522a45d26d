"""
Payments API Client Module

REST client for the unified payments API. Every call returns an ApiResponse
mirroring the server envelope; connectivity problems are reported as
NETWORK_ERROR responses instead of raised.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import httpx

from .errors import TransportError
from .transfers import TransferRequest, DomesticTransferRequest, InternationalTransferRequest
from .logging_config import get_logger

logger = get_logger("payments.client")


@dataclass
class ApiResponse:
    """Decoded response envelope"""
    success: bool
    data: Any = None
    error: Optional[str] = None
    code: Optional[str] = None
    details: Optional[Dict[str, str]] = None


class PaymentApiClient:
    """REST client for the payments API"""

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout: float = 10.0,
        api_prefix: str = "/api",
        http_client: Optional[httpx.Client] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix
        self._client = http_client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def _request(self, method: str, endpoint: str, **kwargs) -> ApiResponse:
        try:
            response = self._client.request(method, f"{self.api_prefix}{endpoint}", **kwargs)
            body = response.json()
            if not isinstance(body, dict):
                raise ValueError(f"unexpected response body: {type(body).__name__}")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"API request failed: {method} {endpoint}: {e}")
            error = TransportError()
            return ApiResponse(success=False, error=error.message, code=error.code.value)

        if not response.is_success:
            return ApiResponse(
                success=False,
                error=body.get("error") or "Request failed",
                code=body.get("code"),
                details=body.get("details")
            )

        return ApiResponse(
            success=body.get("success", True),
            data=body.get("data", body)
        )

    def health_check(self) -> ApiResponse:
        return self._request("GET", "/health")

    def get_account_info(self, account_number: str) -> ApiResponse:
        return self._request("GET", f"/account/{account_number}")

    def process_domestic_transfer(self, request: DomesticTransferRequest) -> ApiResponse:
        payload = {
            "accountNumber": request.account_number,
            "amount": request.amount,
        }
        if request.source_account_number:
            payload["sourceAccountNumber"] = request.source_account_number
        return self._request("POST", "/transfer/domestic", json=payload)

    def process_international_transfer(self, request: InternationalTransferRequest) -> ApiResponse:
        return self._request("POST", "/transfer/international", json={
            "sourceAccountNumber": request.source_account_number,
            "amount": request.amount,
            "iban": request.iban,
            "swiftCode": request.swift_code,
        })

    def submit_payment(self, request: TransferRequest) -> ApiResponse:
        """Send a transfer request to the endpoint for its kind"""
        if isinstance(request, DomesticTransferRequest):
            return self.process_domestic_transfer(request)
        return self.process_international_transfer(request)

    def get_transactions(self, limit: int = 10, offset: int = 0) -> ApiResponse:
        return self._request("GET", "/transactions", params={"limit": limit, "offset": offset})

    def get_transaction(self, transaction_id: str) -> ApiResponse:
        return self._request("GET", f"/transaction/{transaction_id}")

    def close(self):
        """Close the HTTP client"""
        self._client.close()
