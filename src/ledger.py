import logging
from typing import Dict, Iterable, Iterator, Optional

from history import TransactionHistory
from models import ClientAccount, ProcessingOutcome, ProcessingResult, Transaction

logger = logging.getLogger(__name__)


class Ledger:
    """
    Replays transactions in arrival order against per-client accounts.
    Owns every ClientAccount and the TransactionHistory used to resolve disputes.
    """

    def __init__(self, history: Optional[TransactionHistory] = None):
        self._accounts: Dict[int, ClientAccount] = {}
        self._history = history if history is not None else TransactionHistory()

    @property
    def history(self) -> TransactionHistory:
        return self._history

    def process_transaction(self, transaction: Transaction) -> ProcessingOutcome:
        """
        Apply a single transaction.

        Returns:
            ACCOUNT_OPENED: First record seen for the client; account opened from it
            APPLIED: Account operation took effect
            MISSING_REFERENCE: Dispute-family record points at an unknown tx
            REJECTED: Account operation precondition failed
        """
        account = self._accounts.get(transaction.client_id)

        if account is None:
            self._accounts[transaction.client_id] = ClientAccount.open_for(transaction)
            self._history.store_transaction(transaction)
            return ProcessingOutcome(ProcessingResult.ACCOUNT_OPENED, transaction)

        acting = self._resolve_acting(transaction)
        if acting is None:
            logger.info(f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: referenced transaction not found")
            return ProcessingOutcome(ProcessingResult.MISSING_REFERENCE)

        if not account.apply(transaction.transaction_type, acting):
            logger.info(f"Rejected {transaction!r} against {acting!r}")
            return ProcessingOutcome(ProcessingResult.REJECTED)

        recorded = transaction.with_amount(acting.amount)
        self._history.store_transaction(recorded)
        return ProcessingOutcome(ProcessingResult.APPLIED, recorded)

    def process_transactions(self, transactions: Iterable[Transaction]) -> Iterator[ProcessingOutcome]:
        for transaction in transactions:
            yield self.process_transaction(transaction)

    def _resolve_acting(self, transaction: Transaction) -> Optional[Transaction]:
        """The record whose amount and type drive the operation."""
        if transaction.transaction_type.references_prior:
            return self._history.get_transaction(transaction.transaction_id)
        return transaction

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
