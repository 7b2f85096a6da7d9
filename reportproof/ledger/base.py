from abc import ABC, abstractmethod

from reportproof.ledger.models import ReportRecord, TransactionReceipt


class BaseLedgerGateway(ABC):
    """Contract for the append-only ledger holding report records."""

    @abstractmethod
    def append_report(
        self,
        job_id: str,
        report_hash: str,
        product_name: str,
        username: str,
    ) -> TransactionReceipt:
        """Append a report record and block until the ledger confirms it.

        Raises:
            LedgerSubmissionError: if submission, signing or confirmation fails.
            ConfigMissingError: if no signing identity is configured.
        """

    @abstractmethod
    def list_reports(self, job_id: str) -> list[ReportRecord]:
        """Return every record for job_id in ledger append order.

        Raises:
            LedgerReadError: if the ledger cannot be read.
        """
