import logging
from typing import Dict, Iterable, Optional

from ledger import Ledger
from models import ClientAccount, ProcessingStats, Transaction
from reader import read_transactions

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Replays a transaction stream through a Ledger in a single pass.
    Rejected operations are counted and skipped; read and parse errors propagate.
    """

    def __init__(self, ledger: Optional[Ledger] = None):
        self._ledger = ledger if ledger is not None else Ledger()
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing transactions from {filepath}")
        return self.process_transactions(read_transactions(filepath))

    def process_transactions(self, transactions: Iterable[Transaction]) -> Dict[int, ClientAccount]:
        for outcome in self._ledger.process_transactions(transactions):
            self._stats.record(outcome)
            if not outcome.succeeded:
                logger.debug(f"Skipped with {outcome.result.value}")

        logger.info(
            f"Processed: {self._stats.processed}, "
            f"Applied: {self._stats.applied}, "
            f"Opened: {self._stats.opened}, "
            f"Rejected: {self._stats.rejected}, "
            f"Missing reference: {self._stats.missing_reference}"
        )
        return self._ledger.get_all_accounts()
