import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime

from signature_engine.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AuditTrail(Base):
    """Append-only record of one successful signing operation"""
    __tablename__ = "audit_trails"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Input identity
    document_id = Column(String, nullable=False, index=True)

    # Integrity digests (SHA-256 hex)
    original_hash = Column(String(64), nullable=False)
    signed_hash = Column(String(64), nullable=False, index=True)

    # Output location, relative to the public base URL
    signed_file_path = Column(String, nullable=False, unique=True)

    # Requester context (best-effort)
    ip_address = Column(String, nullable=True)
    user_agent = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self) -> str:
        return f"<AuditTrail {self.id} document={self.document_id} file={self.signed_file_path}>"
