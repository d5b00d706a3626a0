from signature_engine.models.audit_trail import AuditTrail

__all__ = [
    "AuditTrail",
]
