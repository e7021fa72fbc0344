from typing import Dict, Optional


class PaymentsEngineError(Exception):
    """Fatal failure that aborts the whole run."""


class InputSourceError(PaymentsEngineError):
    def __init__(self, filepath: str, reason: str):
        super().__init__(f"cannot read {filepath}: {reason}")
        self.filepath = filepath


class TransactionParseError(PaymentsEngineError):
    def __init__(self, line_number: int, reason: str, row: Optional[Dict[str, str]] = None):
        super().__init__(f"line {line_number}: {reason}")
        self.line_number = line_number
        self.row = row
