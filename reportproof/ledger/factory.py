from reportproof.config.exceptions import ConfigMissingError
from reportproof.config.settings import Settings
from reportproof.ledger.abi import load_abi
from reportproof.ledger.base import BaseLedgerGateway
from reportproof.ledger.memory_gateway import InMemoryLedgerGateway
from reportproof.ledger.web3_gateway import Web3LedgerGateway


class LedgerGatewayFactory:
    """Creates the configured ledger gateway."""

    BACKENDS = ("web3", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseLedgerGateway:
        backend = settings.ledger_backend.lower()
        if backend == "memory":
            return InMemoryLedgerGateway()
        if backend != "web3":
            raise ValueError(
                f"Unknown ledger backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
            )
        for name in ("rpc_url", "contract_address"):
            if not getattr(settings, name).strip():
                raise ConfigMissingError(f"{name} is required for ledger_backend=web3")
        return Web3LedgerGateway(
            rpc_url=settings.rpc_url,
            contract_address=settings.contract_address,
            abi=load_abi(settings.abi_path),
            private_key=settings.private_key,
            timeout_seconds=settings.ledger_timeout_seconds,
        )
