"""Process-local ledger.

No network calls. Useful for local development, tests, and dry runs of the
writer and verifier workflows.
"""

import hashlib
import time
from collections import defaultdict

from reportproof.ledger.base import BaseLedgerGateway
from reportproof.ledger.models import ReportRecord, TransactionReceipt


class InMemoryLedgerGateway(BaseLedgerGateway):
    """Append-only record list per job with synthetic transaction hashes."""

    DEFAULT_SENDER = "0x0000000000000000000000000000000000000000"

    def __init__(self, sender: str = DEFAULT_SENDER) -> None:
        self._sender = sender
        self._records: dict[str, list[ReportRecord]] = defaultdict(list)
        self._block_number = 0

    def append_report(
        self,
        job_id: str,
        report_hash: str,
        product_name: str,
        username: str,
    ) -> TransactionReceipt:
        self._block_number += 1
        self._records[job_id].append(
            ReportRecord(
                job_id=job_id,
                username=username,
                product_name=product_name,
                uploaded_by=self._sender,
                timestamp=int(time.time()),
                report_hash=report_hash,
            )
        )
        seed = f"{self._block_number}:{job_id}:{report_hash}".encode()
        return TransactionReceipt(
            tx_hash="0x" + hashlib.sha256(seed).hexdigest(),
            block_number=self._block_number,
        )

    def list_reports(self, job_id: str) -> list[ReportRecord]:
        return list(self._records.get(job_id, []))
