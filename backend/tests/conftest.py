"""Shared fixtures: throwaway PDFs, signature images and an in-memory audit store."""

import base64
import io
from pathlib import Path

import pytest
from PIL import Image, ImageDraw
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from signature_engine.config import Settings
from signature_engine.database import create_db_engine, create_session_factory, init_db


def make_pdf_bytes(pages: int = 2, pagesize=letter) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=pagesize)
    for i in range(pages):
        pdf.drawString(100, 700, f"Hello World - page {i + 1}")
        pdf.drawString(100, 100, "Signature goes here:")
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def make_image_bytes(width: int = 200, height: int = 100, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    color = (255, 255, 255, 0) if mode == "RGBA" else (255, 255, 255)
    img = Image.new(mode, (width, height), color=color)
    d = ImageDraw.Draw(img)
    d.line([0, 0, width, height], fill=(0, 0, 0) if mode == "RGB" else (0, 0, 0, 255), width=3)

    buffered = io.BytesIO()
    img.save(buffered, format=fmt)
    return buffered.getvalue()


def to_data_url(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode()}"


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    return make_pdf_bytes()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes(fmt="JPEG")


@pytest.fixture
def settings(tmp_path: Path, sample_pdf_bytes: bytes) -> Settings:
    documents_dir = tmp_path / "pdfs"
    documents_dir.mkdir()
    (documents_dir / "sample.pdf").write_bytes(sample_pdf_bytes)

    return Settings(
        database_url="sqlite:///:memory:",
        base_url="http://testserver",
        documents_dir=str(documents_dir),
        documents={"sample": "sample.pdf", "ghost": "ghost.pdf"},
        signed_dir=str(tmp_path / "signed"),
    )


@pytest.fixture
def db_session():
    engine = create_db_engine("sqlite:///:memory:")
    init_db(engine)
    db = create_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()
