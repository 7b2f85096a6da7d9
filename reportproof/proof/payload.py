import json

from reportproof.proof.exceptions import ArtifactDecodeError
from reportproof.proof.models import ProofArtifact


def serialize_payload(artifact: ProofArtifact) -> str:
    """Compact JSON text embedded in the QR code."""
    return json.dumps(
        {"jobId": artifact.job_id, "txHash": artifact.tx_hash},
        separators=(",", ":"),
        ensure_ascii=False,
    )


def parse_payload(text: str) -> ProofArtifact:
    """Parse QR text back into a ProofArtifact.

    Raises:
        ArtifactDecodeError: if text is not a JSON object with string
            'jobId' and 'txHash' fields.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ArtifactDecodeError(f"QR payload is not JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ArtifactDecodeError("QR payload must be a JSON object")

    job_id = data.get("jobId")
    tx_hash = data.get("txHash")
    for name, value in (("jobId", job_id), ("txHash", tx_hash)):
        if not value or not isinstance(value, str):
            raise ArtifactDecodeError(f"QR payload field '{name}' must be a non-empty string")
    return ProofArtifact(job_id=job_id, tx_hash=tx_hash)
