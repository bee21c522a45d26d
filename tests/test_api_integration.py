"""
Integration tests for the Unified Payments API
Tests end-to-end workflows using FastAPI TestClient
"""

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from unified_payments.api import create_app, PaymentSystem
from unified_payments.config import PaymentsConfig
from unified_payments.ledger import TransferLedger
from unified_payments.policy import AlwaysAcceptPolicy, FixedOutcomePolicy, OutcomeDecision


FIXED_NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_system(policy=None, ledger=None):
    return PaymentSystem(
        config=PaymentsConfig(simulate_latency=False),
        ledger=ledger or TransferLedger(),
        policy=policy or AlwaysAcceptPolicy(),
        clock=lambda: FIXED_NOW
    )


@pytest.fixture
def client():
    """Create a test client backed by a fresh ledger that accepts everything"""
    return TestClient(create_app(make_system()))


DOMESTIC = {"accountNumber": "87654321", "amount": "100.50"}
INTERNATIONAL = {
    "sourceAccountNumber": "12345678",
    "amount": "500.00",
    "iban": "GB82WEST12345698765432",
    "swiftCode": "AAAABBCC123",
}


class TestHealthEndpoints:
    """Test basic health and routing"""

    def test_health(self, client):
        """Test health endpoint"""
        r = client.get("/api/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "healthy"
        assert data["server"] == "Unified Payments API v1.0"
        assert "timestamp" in data

    def test_unknown_endpoint(self, client):
        """Test that unknown routes use the error envelope"""
        r = client.get("/api/does-not-exist")
        assert r.status_code == 404
        assert r.json() == {"success": False, "error": "Endpoint not found", "code": "NOT_FOUND"}

    def test_wrong_method(self, client):
        r = client.get("/api/transfer/domestic")
        assert r.status_code == 404
        assert r.json()["code"] == "NOT_FOUND"


class TestAccountEndpoints:
    """Test account lookups"""

    def test_get_account(self, client):
        """Test that account details omit the balance"""
        r = client.get("/api/account/12345678")
        assert r.status_code == 200
        assert r.json() == {
            "success": True,
            "data": {
                "accountNumber": "12345678",
                "name": "John Doe",
                "currency": "USD",
                "hasInsufficientFunds": False
            }
        }

    def test_get_unknown_account(self, client):
        r = client.get("/api/account/99999999")
        assert r.status_code == 404
        assert r.json() == {"success": False, "error": "Account not found", "code": "ACCOUNT_NOT_FOUND"}

    def test_list_accounts(self, client):
        r = client.get("/api/accounts")
        assert r.status_code == 200
        accounts = r.json()["data"]["accounts"]
        assert [a["accountNumber"] for a in accounts] == ["12345678", "87654321", "11223344"]
        assert all("balance" not in a for a in accounts)


class TestTransferFlow:
    """End-to-end transfer tests"""

    def test_domestic_transfer(self, client):
        """Test a completed domestic transfer"""
        r = client.post("/api/transfer/domestic", json=DOMESTIC)
        assert r.status_code == 200
        body = r.json()
        assert body["success"] is True

        data = body["data"]
        assert data["type"] == "domestic"
        assert data["status"] == "completed"
        assert data["amount"] == pytest.approx(100.50)
        assert data["fee"] == pytest.approx(0.1005)
        assert data["total"] == pytest.approx(100.6005)
        assert data["processingTime"] == "< 1 minute"
        assert data["recipient"] == {"accountNumber": "87654321", "name": "Jane Smith"}
        assert "estimatedArrival" not in data
        assert data["transactionId"]

    def test_domestic_numeric_amount(self, client):
        """Test that amounts sent as JSON numbers are accepted"""
        r = client.post("/api/transfer/domestic", json={"accountNumber": "87654321", "amount": 250})
        assert r.status_code == 200
        assert r.json()["data"]["fee"] == pytest.approx(0.25)

    def test_international_transfer(self, client):
        """Test a pending international transfer"""
        r = client.post("/api/transfer/international", json=INTERNATIONAL)
        assert r.status_code == 200

        data = r.json()["data"]
        assert data["type"] == "international"
        assert data["status"] == "pending"
        assert data["fee"] == pytest.approx(15.0)
        assert data["total"] == pytest.approx(515.0)
        assert data["processingTime"] == "1-3 business days"
        assert data["recipient"] == {"iban": "GB82WEST12345698765432", "swiftCode": "AAAABBCC123"}
        assert data["estimatedArrival"].startswith("2024-01-18T12:00:00")

    def test_domestic_validation_error(self, client):
        """Test that every failing field is reported"""
        r = client.post("/api/transfer/domestic", json={"accountNumber": "", "amount": "-10"})
        assert r.status_code == 400
        assert r.json() == {
            "success": False,
            "error": "Validation failed",
            "code": "VALIDATION_ERROR",
            "details": {
                "accountNumber": "Account number is required",
                "amount": "Amount must be greater than zero"
            }
        }

    def test_missing_fields(self, client):
        r = client.post("/api/transfer/international", json={})
        assert r.status_code == 400
        details = r.json()["details"]
        assert details["sourceAccountNumber"] == "Account number is required"
        assert details["amount"] == "Amount is required"
        assert details["iban"] == "IBAN is required"
        assert details["swiftCode"] == "SWIFT code is required"

    def test_malformed_body(self, client):
        """Test that a body that is not JSON is a validation error"""
        r = client.post(
            "/api/transfer/domestic",
            content="not json",
            headers={"Content-Type": "application/json"}
        )
        assert r.status_code == 400
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_wrongly_typed_amount(self, client):
        """Test that type errors are keyed by the request field"""
        r = client.post("/api/transfer/domestic", json={"accountNumber": "87654321", "amount": {"v": 1}})
        assert r.status_code == 400
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert list(body["details"]) == ["amount"]

    def test_negative_limit_keyed_by_parameter(self, client):
        r = client.get("/api/transactions", params={"limit": -1})
        assert list(r.json()["details"]) == ["limit"]

    def test_unknown_recipient(self, client):
        r = client.post("/api/transfer/domestic", json={"accountNumber": "99999999", "amount": "100"})
        assert r.status_code == 404
        assert r.json() == {
            "success": False,
            "error": "Recipient account not found",
            "code": "RECIPIENT_NOT_FOUND"
        }

    def test_unknown_source_account(self, client):
        r = client.post("/api/transfer/international", json={**INTERNATIONAL, "sourceAccountNumber": "99999999"})
        assert r.status_code == 404
        assert r.json()["code"] == "SOURCE_ACCOUNT_NOT_FOUND"

    def test_technical_failure(self):
        client = TestClient(create_app(make_system(
            policy=FixedOutcomePolicy(OutcomeDecision.TECHNICAL_FAILURE)
        )))

        r = client.post("/api/transfer/domestic", json=DOMESTIC)

        assert r.status_code == 500
        assert r.json() == {
            "success": False,
            "error": "Transfer failed due to technical issues",
            "code": "TRANSFER_FAILED"
        }
        assert client.get("/api/transactions").json()["data"]["total"] == 0

    def test_compliance_block(self):
        client = TestClient(create_app(make_system(
            policy=FixedOutcomePolicy(OutcomeDecision.COMPLIANCE_BLOCK)
        )))

        r = client.post("/api/transfer/international", json=INTERNATIONAL)

        assert r.status_code == 400
        assert r.json()["code"] == "COMPLIANCE_BLOCKED"
        assert r.json()["error"] == "Transfer blocked by compliance checks"


class TestTransactionHistory:
    """Test transaction listing and lookup"""

    def test_empty_history(self, client):
        r = client.get("/api/transactions")
        assert r.status_code == 200
        assert r.json() == {
            "success": True,
            "data": {"transactions": [], "total": 0, "hasMore": False}
        }

    def test_history_after_transfers(self, client):
        """Test that accepted transfers appear newest first"""
        first = client.post("/api/transfer/domestic", json=DOMESTIC).json()["data"]
        second = client.post("/api/transfer/international", json=INTERNATIONAL).json()["data"]

        r = client.get("/api/transactions", params={"limit": 1})
        data = r.json()["data"]

        assert data["total"] == 2
        assert data["hasMore"] is True
        assert [t["id"] for t in data["transactions"]] == [second["transactionId"]]

        r = client.get("/api/transactions", params={"limit": 1, "offset": 1})
        data = r.json()["data"]
        assert [t["id"] for t in data["transactions"]] == [first["transactionId"]]
        assert data["hasMore"] is False

    def test_get_transaction(self, client):
        created = client.post("/api/transfer/domestic", json=DOMESTIC).json()["data"]

        r = client.get(f"/api/transaction/{created['transactionId']}")

        assert r.status_code == 200
        data = r.json()["data"]
        assert data["id"] == created["transactionId"]
        assert data["type"] == "domestic"
        assert data["accountNumber"] == "87654321"
        assert data["recipientName"] == "Jane Smith"
        assert data["amount"] == pytest.approx(100.50)
        assert "iban" not in data

    def test_get_unknown_transaction(self, client):
        r = client.get("/api/transaction/nonexistent")
        assert r.status_code == 404
        assert r.json() == {"success": False, "error": "Transaction not found", "code": "TRANSACTION_NOT_FOUND"}

    def test_negative_paging(self, client):
        r = client.get("/api/transactions", params={"limit": -1})
        assert r.status_code == 400
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_rejections_do_not_record(self, client):
        client.post("/api/transfer/domestic", json={"accountNumber": "abc", "amount": "1"})
        client.post("/api/transfer/domestic", json={"accountNumber": "99999999", "amount": "1"})

        assert client.get("/api/transactions").json()["data"]["total"] == 0


class TestUnexpectedErrors:
    """Test the catch-all error handler"""

    def test_unhandled_error_is_internal_error(self):
        class BrokenLedger(TransferLedger):
            def list_transactions(self, limit=10, offset=0):
                raise RuntimeError("storage offline")

        client = TestClient(create_app(make_system(ledger=BrokenLedger())), raise_server_exceptions=False)

        r = client.get("/api/transactions")

        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "Internal server error", "code": "INTERNAL_ERROR"}
