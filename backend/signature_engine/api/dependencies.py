from typing import Iterator, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from signature_engine.config import Settings
from signature_engine.services.audit_service import AuditService
from signature_engine.services.signing_service import SigningService


def get_settings(request: Request) -> Settings:
    """Settings the application was created with"""
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for an audit store session, closed after the request"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_signing_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SigningService:
    return SigningService(db, settings)


def get_audit_service(db: Session = Depends(get_db)) -> AuditService:
    return AuditService(db)


def get_client_ip(request: Request) -> Optional[str]:
    """Best-effort requester address: first X-Forwarded-For hop, else the peer"""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client:
        return request.client.host
    return None
