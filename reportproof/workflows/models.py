from dataclasses import dataclass, field
from pathlib import Path

from reportproof.ledger.models import ReportRecord, TransactionReceipt


@dataclass(frozen=True)
class WriteConfirmation:
    """Outcome of a successful write: the confirmed record and its QR artifact."""

    job_id: str
    report_hash: str
    receipt: TransactionReceipt
    record: ReportRecord
    artifact_path: Path


@dataclass(frozen=True)
class Verified:
    """A ledger record carries the locally recomputed fingerprint."""

    record: ReportRecord
    local_hash: str
    stored_at: str


@dataclass(frozen=True)
class Mismatched:
    """No ledger record for the job carries the local fingerprint."""

    job_id: str
    local_hash: str
    onchain_hashes: list[str] = field(default_factory=list)


VerificationResult = Verified | Mismatched
