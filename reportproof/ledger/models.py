from dataclasses import dataclass


@dataclass(frozen=True)
class ReportRecord:
    """One ledger-stored entry binding a job id to a report fingerprint."""

    job_id: str
    username: str
    product_name: str
    uploaded_by: str
    timestamp: int
    report_hash: str


@dataclass(frozen=True)
class TransactionReceipt:
    """Confirmation that an append was included in a block."""

    tx_hash: str
    block_number: int
