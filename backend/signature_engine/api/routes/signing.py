import logging

from fastapi import APIRouter, Depends, Request

from signature_engine.api.dependencies import get_client_ip, get_settings, get_signing_service
from signature_engine.config import Settings
from signature_engine.schemas.signing import DocumentListResponse, SignPdfRequest, SignPdfResponse
from signature_engine.services.signing_service import SigningService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["signing"])


@router.post("/sign-pdf", response_model=SignPdfResponse)
def sign_pdf(
    payload: SignPdfRequest,
    request: Request,
    service: SigningService = Depends(get_signing_service),
):
    """Place a signature image on a document page and record the audit trail"""
    result = service.sign(
        payload.to_placement(),
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    return SignPdfResponse(
        url=result.url,
        original_hash=result.original_hash,
        signed_hash=result.signed_hash,
    )


@router.get("/documents", response_model=DocumentListResponse)
def list_documents(settings: Settings = Depends(get_settings)):
    """Document ids that can be signed"""
    return DocumentListResponse(documents=sorted(settings.documents))
