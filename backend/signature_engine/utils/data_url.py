"""Parsing of ``data:<mime>;base64,<payload>`` signature uploads."""

import base64
import binascii
from dataclasses import dataclass
from typing import Optional

from signature_engine.utils.exceptions import ValidationError

FIELD = "signatureBase64"


@dataclass(frozen=True)
class DataUrl:
    mime_type: Optional[str]  # As declared by the client; not trusted
    payload: bytes


def _declared_mime(header: str) -> Optional[str]:
    header = header.strip()
    if not header.lower().startswith("data:"):
        return None
    media = header[5:].split(";", 1)[0].strip()
    return media or None


def parse_data_url(value: str, max_bytes: Optional[int] = None) -> DataUrl:
    """Split a data URL into its declared mime type and decoded bytes.

    Raises:
        ValidationError: missing comma separator, invalid base64, empty or
            oversized payload.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Signature image data URL is required", FIELD)

    parts = value.split(",")
    if len(parts) != 2:
        raise ValidationError("Invalid signature image data URL", FIELD)

    header, encoded = parts
    encoded = "".join(encoded.split())
    if not encoded:
        raise ValidationError("Signature image data URL has an empty payload", FIELD)

    # Encoded length bounds the decoded size; reject before decoding.
    if max_bytes is not None and len(encoded) * 3 // 4 > max_bytes + 2:
        raise ValidationError(
            "Signature image is too large",
            FIELD,
            {"max_bytes": max_bytes}
        )

    try:
        payload = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Signature image payload is not valid base64: {e}", FIELD)

    if max_bytes is not None and len(payload) > max_bytes:
        raise ValidationError(
            "Signature image is too large",
            FIELD,
            {"max_bytes": max_bytes, "size": len(payload)}
        )

    return DataUrl(mime_type=_declared_mime(header), payload=payload)
