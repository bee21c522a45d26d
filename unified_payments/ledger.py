"""
Transfer Ledger Module

In-memory record of accounts and accepted transactions. The ledger is the sole
owner of both; transactions can only be appended, never changed or removed.

Appending is the only mutation. It assigns the transaction id and insertion
sequence and stores the record while holding the ledger lock, so readers never
observe a transaction without its identity or out of insertion order.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional
import itertools
import threading
import uuid

from .accounts import Account, demo_accounts
from .storage import StorageInterface, InMemoryStorage
from .transfers import Transaction
from .logging_config import get_logger, log_action


@dataclass(frozen=True)
class TransactionPage:
    """One page of the transaction history, newest first"""
    transactions: List[Transaction]
    total: int
    has_more: bool


class TransferLedger:
    """
    Accounts and accepted transactions for the lifetime of the process
    """

    def __init__(
        self,
        storage: Optional[StorageInterface] = None,
        accounts: Optional[Iterable[Account]] = None
    ):
        self.storage = storage or InMemoryStorage()
        self.accounts_table = "accounts"
        self.transactions_table = "transactions"
        self.logger = get_logger("payments.ledger")
        self._lock = threading.Lock()
        self._sequence = itertools.count(self.storage.count(self.transactions_table) + 1)

        for account in (demo_accounts() if accounts is None else accounts):
            self.storage.save(self.accounts_table, account.account_number, account.to_dict())

    def account_exists(self, account_number: str) -> bool:
        """Check whether an account is known"""
        return self.storage.exists(self.accounts_table, account_number)

    def get_account(self, account_number: str) -> Optional[Account]:
        """Get account by number"""
        data = self.storage.load(self.accounts_table, account_number)
        if data:
            return Account.from_dict(data)
        return None

    def list_accounts(self) -> List[Account]:
        """All accounts in seeding order"""
        return [Account.from_dict(data) for data in self.storage.load_all(self.accounts_table)]

    def append_transaction(self, transaction: Transaction) -> Transaction:
        """
        Record an accepted transaction

        Args:
            transaction: Transaction without ledger identity

        Returns:
            The stored transaction, carrying a fresh id and sequence number

        Raises:
            ValueError: If the transaction already has an id
        """
        if transaction.id is not None:
            raise ValueError(f"Transaction {transaction.id} has already been recorded")

        with self._lock, self.storage.atomic():
            stored = transaction.with_identity(str(uuid.uuid4()), next(self._sequence))
            self.storage.save(self.transactions_table, stored.id, stored.to_dict())

        log_action(
            self.logger, "info", f"Transaction recorded: {stored.transfer_type.value}",
            action="append_transaction", resource=f"transaction:{stored.id}",
            extra={
                "transaction_id": stored.id,
                "sequence": stored.sequence,
                "amount": str(stored.amount),
                "fee": str(stored.fee),
                "status": stored.status.value
            }
        )

        return stored

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID"""
        data = self.storage.load(self.transactions_table, transaction_id)
        if data:
            return Transaction.from_dict(data)
        return None

    def list_transactions(self, limit: int = 10, offset: int = 0) -> TransactionPage:
        """
        Page through transactions, newest first

        Sorting happens before offset and limit are applied. Transactions with
        the same timestamp are ordered by insertion, latest first.

        Args:
            limit: Maximum number of transactions to return
            offset: Number of transactions to skip

        Returns:
            TransactionPage with the page, the total count and whether more remain
        """
        if limit < 0:
            raise ValueError("limit must not be negative")
        if offset < 0:
            raise ValueError("offset must not be negative")

        transactions = [
            Transaction.from_dict(data)
            for data in self.storage.load_all(self.transactions_table)
        ]
        transactions.sort(key=lambda t: (t.timestamp, t.sequence), reverse=True)

        total = len(transactions)
        return TransactionPage(
            transactions=transactions[offset:offset + limit],
            total=total,
            has_more=offset + limit < total
        )
