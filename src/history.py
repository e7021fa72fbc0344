from typing import Dict, Optional

from models import Transaction


class TransactionHistory:
    """
    Last successfully applied record per transaction id.
    Dispute, resolve and chargeback look up the record they reference here
    to learn its amount, type and owning client.
    """

    def __init__(self):
        self._transactions: Dict[int, Transaction] = {}

    def store_transaction(self, transaction: Transaction) -> None:
        """Store transaction, replacing any earlier entry under the same id."""
        self._transactions[transaction.transaction_id] = transaction

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve stored transaction by ID."""
        return self._transactions.get(transaction_id)

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._transactions

    def __len__(self) -> int:
        return len(self._transactions)
