"""
Content Integrity Engine — Deterministic content digests for uploaded files.
"""
import hashlib

# Only cryptographically strong primitives are accepted
STRONG_ALGORITHMS = ("sha256", "sha384", "sha512", "sha3_256", "sha3_512", "blake2b")


class ContentIntegrityEngine:
    """Computes and compares fixed-length hex digests."""

    def __init__(self, algorithm: str = "sha256"):
        algorithm = algorithm.lower()
        if algorithm not in STRONG_ALGORITHMS:
            raise ValueError(
                f"Unsupported hash algorithm '{algorithm}'. Choose one of: {', '.join(STRONG_ALGORITHMS)}"
            )
        self.algorithm = algorithm

    @property
    def digest_length(self) -> int:
        """Length of the hex digest produced by the configured algorithm."""
        return hashlib.new(self.algorithm).digest_size * 2

    def digest(self, data: bytes) -> str:
        """Lowercase hex digest of ``data``."""
        return hashlib.new(self.algorithm, data).hexdigest()

    def verify(self, data: bytes, expected_digest: str) -> bool:
        """Exact comparison: no case folding, trimming, or truncation."""
        return self.digest(data) == expected_digest
