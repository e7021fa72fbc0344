import sys
import logging
from decimal import Decimal
from typing import Dict, List, Optional, TextIO

from errors import PaymentsEngineError
from models import ClientAccount
from payments_engine import PaymentsEngine

logger = logging.getLogger(__name__)

AMOUNT_PLACES = 4
HEADER = "client, available, held, total, locked"


def format_decimal(value: Decimal) -> str:
    """Format decimal fixed to 4 decimal places."""
    return f"{value:.{AMOUNT_PLACES}f}"


def format_account(account: ClientAccount) -> str:
    return (
        f"{account.client_id},"
        f"{format_decimal(account.available)},"
        f"{format_decimal(account.held)},"
        f"{format_decimal(account.total)},"
        f"{str(account.locked).lower()}"
    )


def write_accounts(accounts: Dict[int, ClientAccount], out: TextIO) -> None:
    print(HEADER, file=out)
    for client_id in sorted(accounts.keys()):
        print(format_account(accounts[client_id]), file=out)


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: payments-ledger <input.csv>", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(args[0])
    except PaymentsEngineError as e:
        logger.debug(f"Aborted after {engine.stats.processed} transactions", exc_info=True)
        print(f"error processing records : {e}", file=sys.stderr)
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
