import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from resumecraft.documents.models import PDF_MIME_TYPE, SourceFile


def _build_pdf(pages: list[str]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in pages:
        c.setFont("Helvetica", 28)
        c.drawString(72, 680, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A single-page PDF with one large line of text."""
    return _build_pdf(["Jane Doe Software Engineer"])


@pytest.fixture()
def three_page_pdf_bytes() -> bytes:
    """A three-page PDF with known text on each page."""
    return _build_pdf(["Experience", "Education", "Skills"])


@pytest.fixture()
def pdf_source(sample_pdf_bytes: bytes) -> SourceFile:
    return SourceFile(file_name="resume.pdf", mime_type=PDF_MIME_TYPE, content=sample_pdf_bytes)
