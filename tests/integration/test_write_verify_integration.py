import json
from pathlib import Path

import httpx
import pytest

from reportproof.hashing.canonicalizer import Canonicalizer
from reportproof.hashing.fetcher import HttpxAttachmentFetcher
from reportproof.ledger.memory_gateway import InMemoryLedgerGateway
from reportproof.proof.qr_codec import QrProofArtifactCodec
from reportproof.reports.store import ReportStore
from reportproof.workflows.models import Mismatched, Verified
from reportproof.workflows.verifier import ReportVerifier
from reportproof.workflows.writer import ReportWriter

BASE = "https://files.example.com/J1"


class CsvServer:
    """Mutable set of CSV bodies served through an httpx.MockTransport."""

    def __init__(self) -> None:
        self.bodies = {
            f"{BASE}/cumulative.csv": "size,cumulative\r\n10,0.12\r\n20,0.55\r\n",
            f"{BASE}/particles.csv": "id,diameter\n1,12.5\n2,40.1\n",
            f"{BASE}/rejection.csv": "reason,count\nblurred,3\n",
        }
        self.down: set[str] = set()

    def handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url in self.down:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, text=self.bodies[url])

    def canonicalizer(self) -> Canonicalizer:
        fetcher = HttpxAttachmentFetcher(
            timeout_seconds=5, transport=httpx.MockTransport(self.handle)
        )
        return Canonicalizer(fetcher)


@pytest.fixture()
def job_files(tmp_path: Path) -> Path:
    jobs = tmp_path / "jobs"
    jobs.mkdir()
    report = {
        "jobId": "J1",
        "username": "alice",
        "productName": "batch-7",
        "results": {
            "cumulative_analysis_csv": f"{BASE}/cumulative.csv",
            "particle_distribution_csv": f"{BASE}/particles.csv",
            "rejection_analysis_display_csv": f"{BASE}/rejection.csv",
            "d50_um": 41.7,
        },
    }
    (jobs / "J1.json").write_text(json.dumps(report, indent=2), encoding="utf-8")
    return jobs


def _run_write(jobs: Path, qr_root: Path, server: CsvServer, ledger: InMemoryLedgerGateway):  # type: ignore[no-untyped-def]
    writer = ReportWriter(
        store=ReportStore(jobs_root=jobs),
        canonicalizer=server.canonicalizer(),
        ledger=ledger,
        codec=QrProofArtifactCodec(),
        qr_root=qr_root,
    )
    return writer.write("J1")


def _run_verify(jobs: Path, artifact: Path, server: CsvServer, ledger: InMemoryLedgerGateway):  # type: ignore[no-untyped-def]
    verifier = ReportVerifier(
        store=ReportStore(jobs_root=jobs),
        canonicalizer=server.canonicalizer(),
        ledger=ledger,
        codec=QrProofArtifactCodec(),
    )
    return verifier.verify(artifact)


@pytest.mark.integration
class TestWriteThenVerify:
    def test_untouched_report_verifies(self, tmp_path: Path, job_files: Path) -> None:
        server = CsvServer()
        ledger = InMemoryLedgerGateway()

        confirmation = _run_write(job_files, tmp_path / "qr", server, ledger)
        result = _run_verify(job_files, confirmation.artifact_path, server, ledger)

        assert isinstance(result, Verified)
        assert result.record.report_hash == confirmation.report_hash
        assert result.record.product_name == "batch-7"

    def test_edited_report_is_mismatched(self, tmp_path: Path, job_files: Path) -> None:
        server = CsvServer()
        ledger = InMemoryLedgerGateway()
        confirmation = _run_write(job_files, tmp_path / "qr", server, ledger)

        report_path = job_files / "J1.json"
        data = json.loads(report_path.read_text(encoding="utf-8"))
        data["username"] = "mallory"
        report_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        result = _run_verify(job_files, confirmation.artifact_path, server, ledger)

        assert isinstance(result, Mismatched)
        assert result.onchain_hashes == [confirmation.report_hash]

    def test_edited_attachment_is_mismatched(self, tmp_path: Path, job_files: Path) -> None:
        server = CsvServer()
        ledger = InMemoryLedgerGateway()
        confirmation = _run_write(job_files, tmp_path / "qr", server, ledger)

        server.bodies[f"{BASE}/rejection.csv"] = "reason,count\nblurred,0\n"
        result = _run_verify(job_files, confirmation.artifact_path, server, ledger)

        assert isinstance(result, Mismatched)

    def test_any_historical_record_can_verify(self, tmp_path: Path, job_files: Path) -> None:
        server = CsvServer()
        ledger = InMemoryLedgerGateway()
        first = _run_write(job_files, tmp_path / "qr", server, ledger)
        server.bodies[f"{BASE}/particles.csv"] = "id,diameter\n1,99.9\n"
        _run_write(job_files, tmp_path / "qr", server, ledger)

        server.bodies[f"{BASE}/particles.csv"] = "id,diameter\n1,12.5\n2,40.1\n"
        result = _run_verify(job_files, first.artifact_path, server, ledger)

        assert isinstance(result, Verified)
        assert result.local_hash == first.report_hash

    def test_fetch_failure_at_write_is_pinned_into_fingerprint(
        self, tmp_path: Path, job_files: Path
    ) -> None:
        server = CsvServer()
        ledger = InMemoryLedgerGateway()
        server.down.add(f"{BASE}/particles.csv")
        confirmation = _run_write(job_files, tmp_path / "qr", server, ledger)

        still_down = _run_verify(job_files, confirmation.artifact_path, server, ledger)
        server.down.clear()
        recovered = _run_verify(job_files, confirmation.artifact_path, server, ledger)

        assert isinstance(still_down, Verified)
        assert isinstance(recovered, Mismatched)
