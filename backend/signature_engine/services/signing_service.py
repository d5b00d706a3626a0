"""
Signing pipeline: place a signature image on a PDF page and audit the result.

Stages run strictly in order and any failure aborts the rest:
validate -> hash original -> decode image -> map coordinates -> fit image
-> composite -> hash output -> write output -> persist audit record.
"""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from signature_engine.config import Settings
from signature_engine.services.audit_service import AuditService
from signature_engine.services.document_compositor import DocumentCompositor
from signature_engine.services.hash_service import HashService
from signature_engine.services.image_decoder import ImageDecoder
from signature_engine.utils.aspect_fitter import fit
from signature_engine.utils.coordinate_mapper import to_document_rect
from signature_engine.utils.data_url import parse_data_url
from signature_engine.utils.exceptions import (
    FileOperationError,
    NotFoundError,
    PersistenceError,
    SourceDocumentMissingError,
    ValidationError,
)
from signature_engine.utils.geometry import NormalizedRect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementRequest:
    document_id: str
    signature_data_url: str
    page: int
    rect: NormalizedRect


@dataclass(frozen=True)
class SigningResult:
    url: str
    original_hash: str
    signed_hash: str
    audit_id: str
    signed_file_path: str


class SigningService:
    """Runs one signing operation end to end."""

    def __init__(self,
                 db: Session,
                 settings: Settings,
                 hasher: Optional[HashService] = None,
                 decoder: Optional[ImageDecoder] = None,
                 compositor: Optional[DocumentCompositor] = None,
                 audit_service: Optional[AuditService] = None):
        self.db = db
        self.settings = settings
        self.hasher = hasher or HashService()
        self.decoder = decoder or ImageDecoder(max_pixels=settings.max_signature_pixels)
        self.compositor = compositor or DocumentCompositor()
        self.audit_service = audit_service or AuditService(db)

    def _source_path(self, document_id: str) -> Path:
        """Resolve a registered document id to its file on disk."""
        file_name = self.settings.document_file_name(document_id)
        if file_name is None:
            raise NotFoundError("Document", document_id)

        path = Path(self.settings.documents_dir) / file_name
        if not path.is_file():
            raise SourceDocumentMissingError(document_id, str(path))
        return path

    def _signed_dir(self) -> Path:
        return Path(self.settings.signed_dir)

    def _write_output(self, file_name: str, data: bytes) -> Path:
        output_dir = self._signed_dir()
        output_path = output_dir / file_name
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            # Exclusive create: an existing file is never overwritten
            with open(output_path, "xb") as f:
                f.write(data)
        except OSError as e:
            raise FileOperationError("write", str(output_path), str(e))
        return output_path

    def _discard_orphan(self, output_path: Path) -> None:
        if not self.settings.delete_orphaned_output:
            logger.warning(f"Leaving unaudited output in place: {output_path}")
            return
        try:
            output_path.unlink()
            logger.warning(f"Deleted unaudited output after audit failure: {output_path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Could not delete unaudited output {output_path}: {e}")

    def sign(self,
             request: PlacementRequest,
             ip_address: Optional[str] = None,
             user_agent: Optional[str] = None) -> SigningResult:
        """
        Place the signature on the requested page and record the audit trail.

        Raises:
            ValidationError, NotFoundError, UnsupportedFormat: bad request
            SourceDocumentMissingError, DocumentLoadError, PageNotFound,
            ImageEmbedError, FileOperationError, PersistenceError: internal
        """
        # 1. Validate before touching any file
        if not request.document_id:
            raise ValidationError("documentId is required", "documentId")
        if request.page < 1:
            raise ValidationError("page must be 1 or greater", "page")

        data_url = parse_data_url(request.signature_data_url, self.settings.max_signature_bytes)
        source_path = self._source_path(request.document_id)

        logger.info(
            f"Signing document {request.document_id} page {request.page} "
            f"(declared image type: {data_url.mime_type or 'none'})"
        )

        # 2. Hash BEFORE signing
        try:
            original_bytes = source_path.read_bytes()
        except OSError as e:
            raise FileOperationError("read", str(source_path), str(e))
        original_hash = self.hasher.digest(original_bytes)

        # 3. Classify and size the signature by its bytes
        image = self.decoder.decode(data_url.payload)
        if data_url.mime_type and data_url.mime_type.lower() != image.format.mime_type:
            logger.info(f"Declared {data_url.mime_type} but bytes are {image.format.mime_type}")

        # 4. Percentage coords -> PDF points
        page_geometry = self.compositor.page_geometry(original_bytes, request.page)
        box = to_document_rect(request.rect, page_geometry)

        # 5. Fit inside the box without stretching
        drawn = fit(image.intrinsics, box)

        # 6. Composite
        signed_bytes = self.compositor.compose(original_bytes, request.page, image, drawn)

        # 7. Hash AFTER signing
        signed_hash = self.hasher.digest(signed_bytes)

        # 8. Write under a name derived from the audit id
        audit_uuid = uuid.uuid4()
        audit_id = str(audit_uuid)
        file_name = f"signed-{audit_uuid.hex}.pdf"
        output_path = self._write_output(file_name, signed_bytes)
        relative_path = self.settings.signed_url_for(file_name)

        # 9. Persist the audit trail; an unaudited file is never reported as success
        try:
            audit_trail = self.audit_service.record(
                document_id=request.document_id,
                original_hash=original_hash,
                signed_hash=signed_hash,
                signed_file_path=relative_path,
                ip_address=ip_address,
                user_agent=user_agent,
                audit_id=audit_id,
            )
        except PersistenceError:
            self._discard_orphan(output_path)
            raise

        logger.info(
            f"Signed document {request.document_id} -> {relative_path} "
            f"(original {original_hash[:12]}, signed {signed_hash[:12]})"
        )

        return SigningResult(
            url=self.settings.public_url_for(relative_path),
            original_hash=original_hash,
            signed_hash=signed_hash,
            audit_id=str(audit_trail.id),
            signed_file_path=relative_path,
        )

    def verify_signed_file(self, file_name: str) -> dict:
        """Re-hash a stored output and compare it with its audit record."""
        relative_path = self.settings.signed_url_for(file_name)
        audit_trail = self.audit_service.get_by_signed_file_path(relative_path)
        if audit_trail is None:
            raise NotFoundError("Audit record", file_name)

        output_path = self._signed_dir() / Path(file_name).name
        if not output_path.is_file():
            raise NotFoundError("Signed file", file_name)

        try:
            current_hash = self.hasher.digest(output_path.read_bytes())
        except OSError as e:
            raise FileOperationError("read", str(output_path), str(e))

        intact = current_hash == audit_trail.signed_hash
        if not intact:
            logger.warning(f"Signed file {file_name} does not match its audited hash")

        return {
            "audit_id": str(audit_trail.id),
            "document_id": audit_trail.document_id,
            "signed_file_path": relative_path,
            "expected_hash": audit_trail.signed_hash,
            "current_hash": current_hash,
            "intact": intact,
        }
