import hashlib


class HashService:
    """SHA-256 content digests for the audit trail."""

    algorithm = "sha256"

    def digest(self, data: bytes) -> str:
        """Return the lowercase hex digest (64 chars) of ``data``."""
        return hashlib.sha256(data).hexdigest()


# Singleton instance
hash_service = HashService()
