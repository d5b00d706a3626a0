"""Tests for embedding signature images into PDF pages"""

import io

import pytest
from pypdf import PdfReader

from signature_engine.services.document_compositor import DocumentCompositor
from signature_engine.services.image_decoder import DecodedImage, ImageDecoder, ImageFormat
from signature_engine.utils.exceptions import DocumentLoadError, ImageEmbedError, PageNotFound
from signature_engine.utils.geometry import DrawnRect, ImageIntrinsics, PageGeometry

from conftest import make_image_bytes, make_pdf_bytes

DRAWN = DrawnRect(x_pt=183.6, y_pt=499.5, width_pt=122.4, height_pt=30.6)


def _xobjects(page) -> dict:
    resources = page.get("/Resources")
    if resources is None:
        return {}
    resources = resources.get_object()
    if "/XObject" not in resources:
        return {}
    return dict(resources["/XObject"].get_object())


def test_page_geometry_reads_mediabox(sample_pdf_bytes):
    geometry = DocumentCompositor().page_geometry(sample_pdf_bytes, 1)

    assert geometry == PageGeometry(width_pt=612, height_pt=792, origin_x=0, origin_y=0)


def test_page_geometry_of_a4_second_page():
    source = make_pdf_bytes(pages=2, pagesize=(595.28, 841.89))

    geometry = DocumentCompositor().page_geometry(source, 2)

    assert geometry.width_pt == pytest.approx(595.28)
    assert geometry.height_pt == pytest.approx(841.89)


def test_compose_png_on_first_page(sample_pdf_bytes, png_bytes):
    image = ImageDecoder().decode(png_bytes)

    signed = DocumentCompositor().compose(sample_pdf_bytes, 1, image, DRAWN)

    original = PdfReader(io.BytesIO(sample_pdf_bytes))
    reader = PdfReader(io.BytesIO(signed))
    assert len(reader.pages) == len(original.pages)

    signed_page = reader.pages[0]
    assert _xobjects(signed_page), "signature image not embedded"
    assert "Hello World - page 1" in signed_page.extract_text()
    assert float(signed_page.mediabox.width) == 612
    assert float(signed_page.mediabox.height) == 792

    # Other pages untouched
    assert not _xobjects(reader.pages[1])
    assert reader.pages[1].extract_text() == original.pages[1].extract_text()


def test_compose_jpeg_on_second_page(sample_pdf_bytes, jpeg_bytes):
    image = ImageDecoder().decode(jpeg_bytes)

    signed = DocumentCompositor().compose(sample_pdf_bytes, 2, image, DRAWN)

    reader = PdfReader(io.BytesIO(signed))
    assert not _xobjects(reader.pages[0])
    assert _xobjects(reader.pages[1])


def test_compose_png_with_transparency(sample_pdf_bytes):
    image = ImageDecoder().decode(make_image_bytes(120, 60, mode="RGBA"))

    signed = DocumentCompositor().compose(sample_pdf_bytes, 1, image, DRAWN)

    assert PdfReader(io.BytesIO(signed)).pages[0] is not None


def test_source_bytes_are_not_modified(sample_pdf_bytes, png_bytes):
    before = bytes(sample_pdf_bytes)

    signed = DocumentCompositor().compose(sample_pdf_bytes, 1, ImageDecoder().decode(png_bytes), DRAWN)

    assert sample_pdf_bytes == before
    assert signed != sample_pdf_bytes


def test_off_page_and_zero_area_placements_do_not_fail(sample_pdf_bytes, png_bytes):
    image = ImageDecoder().decode(png_bytes)
    compositor = DocumentCompositor()

    off_page = DrawnRect(x_pt=550, y_pt=-40, width_pt=183.6, height_pt=91.8)
    assert compositor.compose(sample_pdf_bytes, 1, image, off_page).startswith(b"%PDF")

    collapsed = DrawnRect(x_pt=30, y_pt=80, width_pt=0, height_pt=0)
    assert compositor.compose(sample_pdf_bytes, 1, image, collapsed).startswith(b"%PDF")


@pytest.mark.parametrize("page_number", [0, 3, 99])
def test_page_out_of_range(sample_pdf_bytes, png_bytes, page_number):
    image = ImageDecoder().decode(png_bytes)

    with pytest.raises(PageNotFound) as exc_info:
        DocumentCompositor().compose(sample_pdf_bytes, page_number, image, DRAWN)

    assert exc_info.value.details == {"page": page_number, "page_count": 2}
    assert exc_info.value.expose is False


@pytest.mark.parametrize("source", [b"", b"not a pdf at all", b"%PDF-1.4\n%%garbage"])
def test_unparseable_document(source, png_bytes):
    with pytest.raises(DocumentLoadError):
        DocumentCompositor().compose(source, 1, ImageDecoder().decode(png_bytes), DRAWN)


def test_corrupt_image_data_fails_to_embed(sample_pdf_bytes):
    image = DecodedImage(
        format=ImageFormat.PNG,
        intrinsics=ImageIntrinsics(10, 10),
        data=b"\x89PNG\r\n\x1a\n" + b"\x00" * 32,
    )

    with pytest.raises(ImageEmbedError) as exc_info:
        DocumentCompositor().compose(sample_pdf_bytes, 1, image, DRAWN)

    assert exc_info.value.details == {"format": "png"}
