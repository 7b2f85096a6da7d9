class ProofArtifactError(Exception):
    """Base exception for proof artifact errors."""


class ArtifactNotFoundError(ProofArtifactError):
    """Raised when no proof artifact image exists at the expected location."""


class ArtifactDecodeError(ProofArtifactError):
    """Raised when an image holds no QR code or its payload is malformed."""
