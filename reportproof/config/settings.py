from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    ledger_backend: str = "web3"
    rpc_url: str = ""
    private_key: str = ""
    contract_address: str = Field(
        default="",
        validation_alias=AliasChoices("contract_address", "proxycontract_localhost"),
    )
    abi_path: Path = Path("ABI/grams-v1.json")
    ledger_timeout_seconds: int = 120

    sample_job_id: str = ""
    jobs_dir: Path = Path("jobs")
    qr_dir: Path = Path("qr")

    attachment_timeout_seconds: float = 30.0

    qr_box_size: int = 10
    qr_border: int = 2
