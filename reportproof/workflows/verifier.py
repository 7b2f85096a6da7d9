import logging
from datetime import datetime, tzinfo
from pathlib import Path

from reportproof.config.settings import Settings
from reportproof.hashing.canonicalizer import Canonicalizer
from reportproof.hashing.fetcher import HttpxAttachmentFetcher
from reportproof.hashing.fingerprint import fingerprint, fingerprints_match
from reportproof.ledger.base import BaseLedgerGateway
from reportproof.ledger.factory import LedgerGatewayFactory
from reportproof.logging.logger import Log
from reportproof.proof.exceptions import ArtifactNotFoundError
from reportproof.proof.qr_codec import QrProofArtifactCodec
from reportproof.reports.store import ReportStore
from reportproof.workflows.models import Mismatched, VerificationResult, Verified
from reportproof.workflows.steps import workflow_step


def format_timestamp(unix: int, tz: tzinfo | None = None) -> str:
    """Render a ledger timestamp like 'Jan 05, 2025, 03:04:05 PM'; 'N/A' when unset."""
    if not unix:
        return "N/A"
    return datetime.fromtimestamp(int(unix), tz=tz).strftime("%b %d, %Y, %I:%M:%S %p")


def find_artifact(qr_root: Path) -> Path:
    """Pick the first PNG (by name) in the artifact directory."""
    candidates = sorted(qr_root.glob("*.png")) if qr_root.is_dir() else []
    if not candidates:
        raise ArtifactNotFoundError(f"No QR file found in {qr_root}")
    return candidates[0]


class ReportVerifier:
    """Recomputes a report fingerprint and checks it against the ledger.

    Read-only: neither the ledger nor any file is modified.
    """

    def __init__(
        self,
        store: ReportStore,
        canonicalizer: Canonicalizer,
        ledger: BaseLedgerGateway,
        codec: QrProofArtifactCodec,
    ) -> None:
        self._store = store
        self._canonicalizer = canonicalizer
        self._ledger = ledger
        self._codec = codec

    def verify(self, artifact_path: Path) -> VerificationResult:
        Log.info(f"Reading QR file: {artifact_path}")
        with workflow_step("verify", f"artifact {artifact_path}", "artifact decode"):
            artifact = self._codec.decode(artifact_path)
        job_id = artifact.job_id
        Log.info(f"QR decoded -> jobId: {job_id}, txHash: {artifact.tx_hash}")

        with workflow_step("verify", f"job {job_id}", "load report"):
            report = self._store.load(job_id)

        with workflow_step("verify", f"job {job_id}", "fingerprint"):
            local_hash = fingerprint(self._canonicalizer.canonicalize(report))

        with workflow_step("verify", f"job {job_id}", "ledger read"):
            records = self._ledger.list_reports(job_id)

        for record in records:
            if fingerprints_match(record.report_hash, local_hash):
                return Verified(
                    record=record,
                    local_hash=local_hash,
                    stored_at=format_timestamp(record.timestamp),
                )
        return Mismatched(
            job_id=job_id,
            local_hash=local_hash,
            onchain_hashes=[record.report_hash for record in records],
        )


def report_outcome(result: VerificationResult) -> None:
    """Log the human-readable verification banner."""
    if isinstance(result, Verified):
        Log.block(
            "Verified on Blockchain",
            [
                f"Job ID: {result.record.job_id}",
                f"Product: {result.record.product_name}",
                f"Analyst: {result.record.username}",
                f"Stored At: {result.stored_at}",
                "Report hash matches the blockchain.",
                "No tampering detected.",
            ],
        )
        return

    onchain = [f"{i}. {h}" for i, h in enumerate(result.onchain_hashes, start=1)]
    Log.block(
        "Verification Failed",
        [
            f"Job ID: {result.job_id}",
            "Local Hash:",
            result.local_hash,
            "On-Chain Hashes:",
            *(onchain or ["(none)"]),
            "Hash mismatch detected.",
            "Report may have been modified.",
        ],
        level=logging.WARNING,
    )


def build_verifier(
    settings: Settings,
    ledger: BaseLedgerGateway | None = None,
) -> ReportVerifier:
    """Build a ReportVerifier with all required adapters."""
    fetcher = HttpxAttachmentFetcher(timeout_seconds=settings.attachment_timeout_seconds)
    return ReportVerifier(
        store=ReportStore(jobs_root=settings.jobs_dir),
        canonicalizer=Canonicalizer(fetcher),
        ledger=ledger if ledger is not None else LedgerGatewayFactory.create(settings),
        codec=QrProofArtifactCodec(box_size=settings.qr_box_size, border=settings.qr_border),
    )
