import hashlib

FINGERPRINT_PREFIX = "0x"


def fingerprint(data: bytes) -> str:
    """SHA-256 of data as lowercase hex with a 0x prefix."""
    return FINGERPRINT_PREFIX + hashlib.sha256(data).hexdigest()


def fingerprints_match(left: str, right: str) -> bool:
    """Compare two fingerprints; ledger-stored hex may differ in case."""
    return left.lower() == right.lower()
