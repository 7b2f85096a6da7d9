class LedgerError(Exception):
    """Base exception for failures talking to the report ledger."""


class LedgerSubmissionError(LedgerError):
    """Raised when appending a report record fails or is reverted."""


class LedgerReadError(LedgerError):
    """Raised when report records cannot be read back from the ledger."""


class MalformedAbiError(Exception):
    """Raised when the contract ABI is not usable."""
