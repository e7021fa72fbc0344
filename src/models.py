import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def references_prior(self) -> bool:
        """Dispute-family records carry no amount and point at an earlier tx."""
        return self in (TransactionType.DISPUTE, TransactionType.RESOLVE, TransactionType.CHARGEBACK)


class ProcessingResult(Enum):
    APPLIED = "applied"
    ACCOUNT_OPENED = "account_opened"
    REJECTED = "rejected"
    MISSING_REFERENCE = "missing_reference"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    @property
    def value(self) -> Decimal:
        return self.amount if self.amount is not None else ZERO

    def with_amount(self, amount: Optional[Decimal]) -> "Transaction":
        return replace(self, amount=amount)

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass(frozen=True)
class ProcessingOutcome:
    """
    Result of replaying one record.
    `recorded` is the amount-complete entry stored into history, set only on success.
    """
    result: ProcessingResult
    recorded: Optional[Transaction] = None

    @property
    def succeeded(self) -> bool:
        return self.result in (ProcessingResult.APPLIED, ProcessingResult.ACCOUNT_OPENED)


@dataclass
class ClientAccount:
    """
    Per-client balances.
    `total` is a running value kept in step with available and held, not derived from them.
    Every operation takes the acting record and returns False without mutating on rejection.
    """
    client_id: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    total: Decimal = ZERO
    locked: bool = False

    @classmethod
    def open_for(cls, transaction: Transaction) -> "ClientAccount":
        """Open the account of a first-seen client; only a deposit funds it."""
        opening = transaction.value if transaction.transaction_type == TransactionType.DEPOSIT else ZERO
        return cls(client_id=transaction.client_id, available=opening, total=opening)

    def owns(self, transaction: Transaction) -> bool:
        return self.client_id == transaction.client_id

    def apply(self, transaction_type: TransactionType, acting: Transaction) -> bool:
        """Run the operation named by the incoming record's type against the acting record."""
        match transaction_type:
            case TransactionType.DEPOSIT:
                return self.deposit(acting)
            case TransactionType.WITHDRAWAL:
                return self.withdrawal(acting)
            case TransactionType.DISPUTE:
                return self.dispute(acting)
            case TransactionType.RESOLVE:
                return self.resolve(acting)
            case TransactionType.CHARGEBACK:
                return self.chargeback(acting)

    def deposit(self, transaction: Transaction) -> bool:
        if self.locked or not self.owns(transaction):
            return False
        self.available += transaction.value
        self.total += transaction.value
        return True

    def withdrawal(self, transaction: Transaction) -> bool:
        """Insufficient available funds rejects the withdrawal outright."""
        if self.locked or not self.owns(transaction):
            return False
        if self.available < transaction.value:
            logger.debug(f"Withdrawal tx {transaction.transaction_id}: insufficient funds for client {self.client_id}")
            return False
        self.available -= transaction.value
        self.total -= transaction.value
        return True

    def dispute(self, transaction: Transaction) -> bool:
        # A disputed withdrawal is always held, regardless of lock state or owner.
        disputable = transaction.transaction_type == TransactionType.WITHDRAWAL or (
            transaction.transaction_type == TransactionType.DEPOSIT
            and not self.locked
            and self.owns(transaction)
        )
        if not disputable:
            return False
        self.held += transaction.value
        self.available -= transaction.value
        return True

    def resolve(self, transaction: Transaction) -> bool:
        if transaction.transaction_type != TransactionType.DISPUTE:
            return False
        if self.locked or not self.owns(transaction):
            return False
        self.held -= transaction.value
        self.available += transaction.value
        return True

    def chargeback(self, transaction: Transaction) -> bool:
        # Lock state is not checked: a locked account still settles its open disputes.
        if transaction.transaction_type != TransactionType.DISPUTE or not self.owns(transaction):
            return False
        self.locked = True
        self.total -= transaction.value
        self.held -= transaction.value
        return True


class ProcessingStats:
    """Counters for one replay run."""

    def __init__(self):
        self.applied = 0
        self.opened = 0
        self.rejected = 0
        self.missing_reference = 0

    def record(self, outcome: ProcessingOutcome) -> None:
        match outcome.result:
            case ProcessingResult.APPLIED:
                self.applied += 1
            case ProcessingResult.ACCOUNT_OPENED:
                self.opened += 1
            case ProcessingResult.REJECTED:
                self.rejected += 1
            case ProcessingResult.MISSING_REFERENCE:
                self.missing_reference += 1

    @property
    def processed(self) -> int:
        return self.applied + self.opened + self.rejected + self.missing_reference
