import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from signature_engine.models.audit_trail import AuditTrail, utcnow
from signature_engine.utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class AuditService:
    """Append-only audit trail for signing operations"""

    def __init__(self, db: Session):
        self.db = db

    def record(self,
               document_id: str,
               original_hash: str,
               signed_hash: str,
               signed_file_path: str,
               ip_address: Optional[str] = None,
               user_agent: Optional[str] = None,
               audit_id: Optional[str] = None) -> AuditTrail:
        """
        Persist the audit record of one signing operation

        Args:
            document_id: Identity of the source document
            original_hash: SHA-256 of the unmodified source bytes
            signed_hash: SHA-256 of the signed output bytes
            signed_file_path: Relative location the output is served from
            ip_address: Requester address (best-effort)
            user_agent: Requester user agent
            audit_id: Pre-allocated record id (the output file is named after it)

        Returns:
            The committed audit record

        Raises:
            PersistenceError: the store is unreachable or rejected the write
        """
        audit_trail = AuditTrail(
            document_id=document_id,
            original_hash=original_hash,
            signed_hash=signed_hash,
            signed_file_path=signed_file_path,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=utcnow()
        )
        if audit_id:
            audit_trail.id = audit_id

        try:
            self.db.add(audit_trail)
            self.db.commit()
            self.db.refresh(audit_trail)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Audit write failed for document {document_id}: {e}", exc_info=True)
            raise PersistenceError("write", str(e))

        logger.info(f"Audit record {audit_trail.id} stored for document {document_id}")
        return audit_trail

    def list_for_document(self, document_id: str, limit: int = 100) -> List[AuditTrail]:
        """Audit records of a document, newest first"""
        try:
            return self.db.query(AuditTrail).filter(
                AuditTrail.document_id == document_id
            ).order_by(AuditTrail.created_at.desc()).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Audit read failed for document {document_id}: {e}")
            raise PersistenceError("read", str(e))

    def get_by_signed_file_path(self, signed_file_path: str) -> Optional[AuditTrail]:
        try:
            return self.db.query(AuditTrail).filter(
                AuditTrail.signed_file_path == signed_file_path
            ).first()
        except SQLAlchemyError as e:
            logger.error(f"Audit lookup failed for {signed_file_path}: {e}")
            raise PersistenceError("read", str(e))
