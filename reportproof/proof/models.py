from dataclasses import dataclass


@dataclass(frozen=True)
class ProofArtifact:
    """Locator for an on-chain report record; not itself evidence."""

    job_id: str
    tx_hash: str
