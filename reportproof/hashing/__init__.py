from reportproof.hashing.canonicalizer import Canonicalizer
from reportproof.hashing.fetcher import BaseAttachmentFetcher, HttpxAttachmentFetcher
from reportproof.hashing.fingerprint import fingerprint, fingerprints_match

__all__ = [
    "BaseAttachmentFetcher",
    "Canonicalizer",
    "HttpxAttachmentFetcher",
    "fingerprint",
    "fingerprints_match",
]
