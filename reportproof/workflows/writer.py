from pathlib import Path

from reportproof.config.settings import Settings
from reportproof.hashing.canonicalizer import Canonicalizer
from reportproof.hashing.fetcher import HttpxAttachmentFetcher
from reportproof.hashing.fingerprint import fingerprint
from reportproof.ledger.base import BaseLedgerGateway
from reportproof.ledger.exceptions import LedgerReadError
from reportproof.ledger.factory import LedgerGatewayFactory
from reportproof.logging.logger import Log
from reportproof.proof.models import ProofArtifact
from reportproof.proof.qr_codec import QrProofArtifactCodec, artifact_file_path
from reportproof.reports.store import ReportStore
from reportproof.workflows.models import WriteConfirmation
from reportproof.workflows.steps import workflow_step


class ReportWriter:
    """Certifies a report on the ledger.

    Pipeline: load -> fingerprint -> append -> confirm -> read back -> QR.
    """

    def __init__(
        self,
        store: ReportStore,
        canonicalizer: Canonicalizer,
        ledger: BaseLedgerGateway,
        codec: QrProofArtifactCodec,
        qr_root: Path,
    ) -> None:
        self._store = store
        self._canonicalizer = canonicalizer
        self._ledger = ledger
        self._codec = codec
        self._qr_root = qr_root

    def write(self, job_id: str) -> WriteConfirmation:
        """Run the full certification pipeline for one job."""
        Log.info(f"Writing report to blockchain for job {job_id}")

        with workflow_step("write", f"job {job_id}", "load report"):
            report = self._store.load(job_id)
        if report.job_id != job_id:
            Log.warning(f"Report file for job {job_id} declares jobId {report.job_id!r}")

        with workflow_step("write", f"job {job_id}", "fingerprint"):
            report_hash = fingerprint(self._canonicalizer.canonicalize(report))
        Log.info(f"Report hash for job {job_id}: {report_hash}")

        # Steps 3-4: submit and wait for inclusion
        with workflow_step("write", f"job {job_id}", "ledger submission"):
            receipt = self._ledger.append_report(
                job_id, report_hash, report.product_name, report.username
            )
        Log.block(
            "TRANSACTION SUCCESSFUL",
            [f" txHash:       {receipt.tx_hash}", f" block:        {receipt.block_number}"],
        )

        # Step 5: the newest record by ledger order is the confirmation
        with workflow_step("write", f"job {job_id}", "ledger read-back"):
            records = self._ledger.list_reports(job_id)
            if not records:
                raise LedgerReadError(f"Ledger returned no records for job '{job_id}'")
        record = records[-1]
        Log.block(
            "ON-CHAIN STORED REPORT",
            [
                f" jobId:        {record.job_id}",
                f" username:     {record.username}",
                f" productName:  {record.product_name}",
                f" uploadedBy:   {record.uploaded_by}",
                f" timestamp:    {record.timestamp}",
                f" reportHash:   {record.report_hash}",
            ],
        )

        # Step 6: proof artifact
        with workflow_step("write", f"job {job_id}", "artifact write"):
            artifact_path = self._codec.encode(
                ProofArtifact(job_id=job_id, tx_hash=receipt.tx_hash),
                artifact_file_path(self._qr_root, job_id),
            )
        Log.info(f"Job {job_id} certified in {receipt.tx_hash}")

        return WriteConfirmation(
            job_id=job_id,
            report_hash=report_hash,
            receipt=receipt,
            record=record,
            artifact_path=artifact_path,
        )


def build_writer(
    settings: Settings,
    ledger: BaseLedgerGateway | None = None,
) -> ReportWriter:
    """Build a ReportWriter with all required adapters."""
    fetcher = HttpxAttachmentFetcher(timeout_seconds=settings.attachment_timeout_seconds)
    return ReportWriter(
        store=ReportStore(jobs_root=settings.jobs_dir),
        canonicalizer=Canonicalizer(fetcher),
        ledger=ledger if ledger is not None else LedgerGatewayFactory.create(settings),
        codec=QrProofArtifactCodec(box_size=settings.qr_box_size, border=settings.qr_border),
        qr_root=settings.qr_dir,
    )
