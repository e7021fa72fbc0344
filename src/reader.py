import csv
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional

from errors import InputSourceError, TransactionParseError
from models import Transaction, TransactionType

MAX_CLIENT_ID = 65535
MAX_TRANSACTION_ID = 4294967295


def read_transactions(filepath: str) -> Iterator[Transaction]:
    """
    Read CSV with a `type, client, tx, amount` header and yield transactions in file order.
    The first malformed row aborts the read with TransactionParseError.
    """
    try:
        f = open(filepath, "r", newline="", encoding="utf-8-sig")
    except OSError as e:
        raise InputSourceError(filepath, e.strerror or str(e)) from e

    with f:
        reader = csv.DictReader(f)
        try:
            for row in reader:
                yield parse_csv_row(row, reader.line_num)
        except csv.Error as e:
            raise TransactionParseError(reader.line_num, str(e)) from e
        except UnicodeDecodeError as e:
            raise InputSourceError(filepath, str(e)) from e


def parse_csv_row(row: Dict[Optional[str], Optional[str]], line_number: int = 0) -> Transaction:
    """Parse CSV row into Transaction."""
    # Short rows (dispute lines without a trailing comma) leave amount as None.
    normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

    try:
        transaction_type = TransactionType(normalized["type"].lower())
        client_id = _parse_id(normalized["client"], "client", MAX_CLIENT_ID)
        transaction_id = _parse_id(normalized["tx"], "tx", MAX_TRANSACTION_ID)
        amount = _parse_amount(normalized.get("amount", ""))
    except KeyError as e:
        raise TransactionParseError(line_number, f"missing column {e}", row) from e
    except ValueError as e:
        raise TransactionParseError(line_number, str(e), row) from e

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(raw: str, field: str, upper: int) -> int:
    value = int(raw)
    if not 0 <= value <= upper:
        raise ValueError(f"{field} {value} out of range 0..{upper}")
    return value


def _parse_amount(raw: str) -> Optional[Decimal]:
    if not raw:
        return None
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"invalid amount {raw!r}") from None
    if not amount.is_finite():
        raise ValueError(f"invalid amount {raw!r}")
    return amount
