#!/usr/bin/env python3
"""Generate the default ``sample`` document (a two-page US Letter PDF).

Usage:
    cd backend
    python scripts/generate_sample_pdf.py            # writes pdfs/sample.pdf
    python scripts/generate_sample_pdf.py out.pdf
"""

import sys
from pathlib import Path

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def create_sample_pdf(output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)

    pdf = canvas.Canvas(str(output_path), pagesize=letter)
    width, height = letter

    pdf.setTitle("Sample Agreement")
    pdf.setFont("Helvetica-Bold", 16)
    pdf.drawString(72, height - 72, "Sample Agreement")

    pdf.setFont("Helvetica", 11)
    pdf.drawString(72, height - 110, "This document is used to try out signature placement.")
    pdf.drawString(72, height - 128, "Drag a signature field onto the page and submit it.")

    pdf.drawString(72, 140, "Signature:")
    pdf.line(140, 138, width - 72, 138)
    pdf.showPage()

    pdf.setFont("Helvetica", 11)
    pdf.drawString(72, height - 72, "Page 2 - Terms")
    pdf.showPage()

    pdf.save()
    return output_path


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("pdfs") / "sample.pdf"
    print(f"Sample PDF written to {create_sample_pdf(target)}")
