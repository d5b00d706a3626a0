from fastapi import APIRouter, Depends, Query

from signature_engine.api.dependencies import get_audit_service, get_signing_service
from signature_engine.schemas.audit import AuditTrailResponse, SignedFileVerification
from signature_engine.services.audit_service import AuditService
from signature_engine.services.signing_service import SigningService

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("/document/{document_id}", response_model=list[AuditTrailResponse])
def get_document_audit(
    document_id: str,
    limit: int = Query(100, ge=1, le=1000),
    service: AuditService = Depends(get_audit_service),
):
    """Get the audit trail for a document, newest first"""
    return service.list_for_document(document_id, limit=limit)


@router.get("/signed/{file_name}/verify", response_model=SignedFileVerification)
def verify_signed_file(file_name: str, service: SigningService = Depends(get_signing_service)):
    """Re-hash a signed file and compare it with the audited hash"""
    return SignedFileVerification(**service.verify_signed_file(file_name))
