"""Tests for the append-only audit trail"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from signature_engine.models.audit_trail import AuditTrail
from signature_engine.services.audit_service import AuditService
from signature_engine.utils.exceptions import PersistenceError

ORIGINAL = "a" * 64
SIGNED = "b" * 64


def test_record_persists_all_fields(db_session):
    service = AuditService(db_session)

    record = service.record(
        document_id="sample",
        original_hash=ORIGINAL,
        signed_hash=SIGNED,
        signed_file_path="/signed/signed-1.pdf",
        ip_address="203.0.113.7",
        user_agent="pytest",
    )

    stored = db_session.query(AuditTrail).one()
    assert stored.id == record.id
    assert stored.document_id == "sample"
    assert stored.original_hash == ORIGINAL
    assert stored.signed_hash == SIGNED
    assert stored.signed_file_path == "/signed/signed-1.pdf"
    assert stored.ip_address == "203.0.113.7"
    assert stored.user_agent == "pytest"
    assert stored.created_at is not None


def test_record_uses_preallocated_id(db_session):
    record = AuditService(db_session).record(
        "sample", ORIGINAL, SIGNED, "/signed/x.pdf", audit_id="0b5e6c1e-8a6f-4bb2-9d43-1f6d8f0f3a11"
    )

    assert record.id == "0b5e6c1e-8a6f-4bb2-9d43-1f6d8f0f3a11"


def test_list_for_document_newest_first(db_session):
    service = AuditService(db_session)
    first = service.record("sample", ORIGINAL, SIGNED, "/signed/1.pdf")
    second = service.record("sample", ORIGINAL, "c" * 64, "/signed/2.pdf")
    service.record("other", ORIGINAL, SIGNED, "/signed/3.pdf")
    first.created_at = second.created_at - timedelta(seconds=5)
    db_session.commit()

    records = service.list_for_document("sample")

    assert [r.id for r in records] == [second.id, first.id]


def test_get_by_signed_file_path(db_session):
    service = AuditService(db_session)
    record = service.record("sample", ORIGINAL, SIGNED, "/signed/1.pdf")

    assert service.get_by_signed_file_path("/signed/1.pdf").id == record.id
    assert service.get_by_signed_file_path("/signed/missing.pdf") is None


def test_duplicate_output_location_is_rejected(db_session):
    service = AuditService(db_session)
    service.record("sample", ORIGINAL, SIGNED, "/signed/1.pdf")

    with pytest.raises(PersistenceError):
        service.record("sample", ORIGINAL, SIGNED, "/signed/1.pdf")

    # Session is usable again after the rollback
    assert len(service.list_for_document("sample")) == 1


def test_unreachable_store_raises_persistence_error():
    db = MagicMock()
    db.commit.side_effect = OperationalError("INSERT", {}, Exception("database is locked"))

    with pytest.raises(PersistenceError) as exc_info:
        AuditService(db).record("sample", ORIGINAL, SIGNED, "/signed/1.pdf")

    db.rollback.assert_called_once()
    assert exc_info.value.status_code == 500
    assert exc_info.value.expose is False
