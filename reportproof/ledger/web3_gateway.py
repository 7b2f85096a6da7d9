from typing import Any

from eth_account import Account
from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import Web3Exception

from reportproof.config.exceptions import ConfigMissingError
from reportproof.ledger.abi import report_component_names
from reportproof.ledger.base import BaseLedgerGateway
from reportproof.ledger.exceptions import (
    LedgerReadError,
    LedgerSubmissionError,
    MalformedAbiError,
)
from reportproof.ledger.models import ReportRecord, TransactionReceipt
from reportproof.logging.logger import Log


class Web3LedgerGateway(BaseLedgerGateway):
    """Ledger gateway backed by an EVM report-registry contract via web3.py."""

    def __init__(
        self,
        *,
        rpc_url: str,
        contract_address: str,
        abi: list[dict[str, Any]],
        private_key: str = "",
        timeout_seconds: int = 120,
        web3: Web3 | None = None,
    ) -> None:
        if web3 is None:
            web3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout_seconds}))
        self._w3 = web3
        self._timeout_seconds = timeout_seconds
        self._record_fields = report_component_names(abi)
        try:
            address = Web3.to_checksum_address(contract_address)
        except ValueError as exc:
            raise MalformedAbiError(f"Invalid contract address {contract_address!r}") from exc
        self._contract = self._w3.eth.contract(address=address, abi=abi)
        self._account = Account.from_key(private_key) if private_key else None

    def append_report(
        self,
        job_id: str,
        report_hash: str,
        product_name: str,
        username: str,
    ) -> TransactionReceipt:
        if self._account is None:
            raise ConfigMissingError("private_key is required to append report records")

        sender = self._account.address
        try:
            nonce = self._w3.eth.get_transaction_count(sender, "pending")
            tx = self._contract.functions.storeReport(
                job_id, report_hash, product_name, username
            ).build_transaction({"from": sender, "nonce": nonce})
            signed = self._account.sign_transaction(tx)
            tx_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
            Log.info(f"Submitted storeReport for job {job_id}: {Web3.to_hex(tx_hash)}")
            receipt = self._w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self._timeout_seconds
            )
        except (Web3Exception, RequestException) as exc:
            raise LedgerSubmissionError(
                f"storeReport for job '{job_id}' failed: {exc}"
            ) from exc

        tx_hex = Web3.to_hex(receipt["transactionHash"])
        if receipt["status"] != 1:
            raise LedgerSubmissionError(f"storeReport for job '{job_id}' reverted in {tx_hex}")
        return TransactionReceipt(tx_hash=tx_hex, block_number=int(receipt["blockNumber"]))

    def list_reports(self, job_id: str) -> list[ReportRecord]:
        try:
            rows = self._contract.functions.getReports(job_id).call()
        except (Web3Exception, RequestException) as exc:
            raise LedgerReadError(f"getReports for job '{job_id}' failed: {exc}") from exc
        return [self._to_record(row) for row in rows]

    def _to_record(self, row: Any) -> ReportRecord:
        values = dict(zip(self._record_fields, row))
        return ReportRecord(
            job_id=str(values["jobId"]),
            username=str(values["username"]),
            product_name=str(values["productName"]),
            uploaded_by=str(values["uploadedBy"]),
            timestamp=int(values["timestamp"]),
            report_hash=_as_hex(values["reportHash"]),
        )


def _as_hex(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return Web3.to_hex(value)
    return str(value)
