"""
Document compositor: paints a signature image onto one page of a PDF.

The image is drawn with ReportLab on a transparent overlay the size of the
target page, and the overlay is merged onto that page with pypdf. All other
pages, the page boxes and the existing content stream are left as they are.
"""

import io
import logging

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from signature_engine.services.image_decoder import DecodedImage
from signature_engine.utils.exceptions import DocumentLoadError, ImageEmbedError, PageNotFound
from signature_engine.utils.geometry import DrawnRect, PageGeometry

logger = logging.getLogger(__name__)


class DocumentCompositor:
    """Service for embedding signature images into PDF pages."""

    def load_document(self, source: bytes) -> PdfReader:
        """Parse ``source`` into a reader; the input bytes are never modified."""
        try:
            reader = PdfReader(io.BytesIO(source))
            if reader.is_encrypted and not reader.decrypt(""):
                raise DocumentLoadError("document is password protected")
            # Touch the page tree so structural damage surfaces here
            len(reader.pages)
        except DocumentLoadError:
            raise
        except (PyPdfError, ValueError, KeyError, TypeError, OSError) as e:
            logger.error(f"Failed to parse source document: {e}")
            raise DocumentLoadError(str(e))
        return reader

    def _get_page(self, reader: PdfReader, page_number: int):
        page_count = len(reader.pages)
        if page_number < 1 or page_number > page_count:
            raise PageNotFound(page_number, page_count)
        return reader.pages[page_number - 1]

    def page_geometry(self, source: bytes, page_number: int) -> PageGeometry:
        """Media box of the 1-based ``page_number`` in points."""
        reader = self.load_document(source)
        page = self._get_page(reader, page_number)
        return self._geometry_of(page)

    @staticmethod
    def _geometry_of(page) -> PageGeometry:
        mediabox = page.mediabox
        return PageGeometry(
            width_pt=float(mediabox.width),
            height_pt=float(mediabox.height),
            origin_x=float(mediabox.left),
            origin_y=float(mediabox.bottom),
        )

    def _build_overlay(self, geometry: PageGeometry, image: DecodedImage, drawn: DrawnRect):
        """Draw the image on a blank page of the same size and return that page."""
        buffer = io.BytesIO()
        try:
            pdf = canvas.Canvas(buffer, pagesize=(geometry.width_pt, geometry.height_pt))
            # Overlay coordinates are merged in the target page's user space
            pdf.translate(geometry.origin_x, geometry.origin_y)
            pdf.drawImage(
                ImageReader(io.BytesIO(image.data)),
                drawn.x_pt,
                drawn.y_pt,
                width=drawn.width_pt,
                height=drawn.height_pt,
                mask="auto",
            )
            pdf.showPage()
            pdf.save()
        except Exception as e:
            logger.error(f"ReportLab rejected {image.format.value} signature image: {e}")
            raise ImageEmbedError(image.format.value, str(e))

        buffer.seek(0)
        return PdfReader(buffer).pages[0]

    def compose(self, source: bytes, page_number: int, image: DecodedImage, drawn: DrawnRect) -> bytes:
        """Return a new PDF: ``source`` with ``image`` painted at ``drawn``.

        Args:
            source: Original PDF bytes
            page_number: 1-based page to sign
            image: Decoded signature image
            drawn: Final rectangle in PDF points (bottom-left origin)

        Raises:
            DocumentLoadError: ``source`` is not a readable PDF
            PageNotFound: ``page_number`` is outside the document
            ImageEmbedError: the image could not be drawn
        """
        reader = self.load_document(source)
        page = self._get_page(reader, page_number)
        geometry = self._geometry_of(page)

        if page.rotation:
            logger.info(f"Page {page_number} has /Rotate {page.rotation}; placing in unrotated user space")

        overlay_page = self._build_overlay(geometry, image, drawn)

        try:
            writer = PdfWriter(clone_from=reader)
            writer.pages[page_number - 1].merge_page(overlay_page)

            output = io.BytesIO()
            writer.write(output)
        except (PyPdfError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to merge signature onto page {page_number}: {e}")
            raise DocumentLoadError(str(e))

        signed_bytes = output.getvalue()
        output.close()

        logger.info(
            f"Embedded {image.format.value} signature on page {page_number} at "
            f"({drawn.x_pt:.2f}, {drawn.y_pt:.2f}) size {drawn.width_pt:.2f}x{drawn.height_pt:.2f}"
        )
        return signed_bytes


# Singleton instance
document_compositor = DocumentCompositor()
