"""
Signature image classification and sizing.

The leading bytes decide the format, never the mime type the client put in
the data URL. JPEG is recognised by its SOI marker; everything else is
handed to the PNG decoder, which rejects anything that is not a real PNG.
"""

import enum
import io
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from signature_engine.utils.exceptions import UnsupportedFormat
from signature_engine.utils.geometry import ImageIntrinsics

logger = logging.getLogger(__name__)


class ImageFormat(str, enum.Enum):
    JPEG = "jpeg"
    PNG = "png"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"


@dataclass(frozen=True)
class DecodedImage:
    format: ImageFormat
    intrinsics: ImageIntrinsics
    data: bytes


@dataclass(frozen=True)
class FormatVariant:
    """One entry of the decoder registry."""
    format: ImageFormat
    magic: bytes
    pillow_format: str

    def matches(self, raw: bytes) -> bool:
        return raw.startswith(self.magic)


JPEG_VARIANT = FormatVariant(ImageFormat.JPEG, b"\xff\xd8", "JPEG")
PNG_VARIANT = FormatVariant(ImageFormat.PNG, b"\x89PNG\r\n\x1a\n", "PNG")

# Checked in order; PNG_VARIANT is also the fallback for unrecognised bytes.
FORMAT_VARIANTS: Tuple[FormatVariant, ...] = (JPEG_VARIANT, PNG_VARIANT)
FALLBACK_VARIANT = PNG_VARIANT


class ImageDecoder:
    """Classifies signature bytes by magic number and reads their pixel size."""

    def __init__(self, max_pixels: Optional[int] = None):
        self.max_pixels = max_pixels

    def sniff(self, raw: bytes) -> FormatVariant:
        for variant in FORMAT_VARIANTS:
            if variant.matches(raw):
                return variant
        return FALLBACK_VARIANT

    def decode(self, raw: bytes) -> DecodedImage:
        """Classify ``raw`` and return its format and intrinsic size.

        Raises:
            UnsupportedFormat: the bytes do not decode as the sniffed format.
        """
        if not raw:
            raise UnsupportedFormat("empty image data")

        variant = self.sniff(raw)
        if not variant.matches(raw):
            logger.info(f"Signature bytes have no known magic number, trying {variant.format.value}")

        width, height = self._read_size(raw, variant)

        return DecodedImage(
            format=variant.format,
            intrinsics=ImageIntrinsics(width_px=width, height_px=height),
            data=bytes(raw),
        )

    def _read_size(self, raw: bytes, variant: FormatVariant) -> Tuple[int, int]:
        try:
            with Image.open(io.BytesIO(raw), formats=[variant.pillow_format]) as img:
                width, height = img.size
                if self.max_pixels and width * height > self.max_pixels:
                    raise UnsupportedFormat(
                        f"image is {width}x{height}, above the {self.max_pixels} pixel limit",
                        variant.format.value
                    )
                # Force a full decode so truncated or corrupt data fails here
                img.load()
        except UnsupportedFormat:
            raise
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            logger.warning(f"Signature image failed to decode as {variant.pillow_format}: {e}")
            raise UnsupportedFormat(str(e), variant.format.value)

        if width <= 0 or height <= 0:
            raise UnsupportedFormat(f"image has no pixels ({width}x{height})", variant.format.value)

        return width, height
