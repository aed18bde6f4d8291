import pytest

from resumecraft.documents.exceptions import DocumentNotReadyError, PageOutOfRangeError
from resumecraft.documents.models import DisplayHandle, Document
from resumecraft.pdf.base import BasePageRasterizer
from resumecraft.pdf.exceptions import RenderError
from resumecraft.pdf.pdfplumber_adapter import PdfPlumberRasterizer
from resumecraft.pdf.pymupdf_adapter import PyMuPdfRasterizer


def _document(content: bytes, page_count: int) -> Document:
    return Document(
        file_name="cv.pdf",
        content=content,
        handle=DisplayHandle(content),
        page_count=page_count,
    )


@pytest.fixture(params=[PyMuPdfRasterizer, PdfPlumberRasterizer], ids=["pymupdf", "pdfplumber"])
def rasterizer(request: pytest.FixtureRequest) -> BasePageRasterizer:
    return request.param()


class TestPageRasterizers:
    def test_count_pages(self, rasterizer: BasePageRasterizer, three_page_pdf_bytes: bytes) -> None:
        assert rasterizer.count_pages(three_page_pdf_bytes) == 3

    def test_count_pages_raises_on_invalid_bytes(self, rasterizer: BasePageRasterizer) -> None:
        with pytest.raises(RenderError):
            rasterizer.count_pages(b"not a pdf")

    def test_page_size_is_letter(self, rasterizer: BasePageRasterizer, sample_pdf_bytes: bytes) -> None:
        width, height = rasterizer.page_size(_document(sample_pdf_bytes, 1), 1)
        assert width == pytest.approx(612, abs=1)
        assert height == pytest.approx(792, abs=1)

    @pytest.mark.parametrize("scale,expected_width", [(1.0, 612), (2.0, 1224)])
    def test_render_size_follows_scale(
        self,
        rasterizer: BasePageRasterizer,
        sample_pdf_bytes: bytes,
        scale: float,
        expected_width: int,
    ) -> None:
        image = rasterizer.render(_document(sample_pdf_bytes, 1), 1, scale)
        assert image.mode == "RGB"
        assert image.width == pytest.approx(expected_width, abs=2)

    def test_render_draws_text(self, rasterizer: BasePageRasterizer, sample_pdf_bytes: bytes) -> None:
        image = rasterizer.render(_document(sample_pdf_bytes, 1), 1, 1.0)
        darkest = min(image.convert("L").getdata())
        assert darkest < 128

    def test_render_out_of_range_page(self, rasterizer: BasePageRasterizer, sample_pdf_bytes: bytes) -> None:
        with pytest.raises(PageOutOfRangeError):
            rasterizer.render(_document(sample_pdf_bytes, 1), 2, 1.0)

    def test_render_unloaded_document(self, rasterizer: BasePageRasterizer, sample_pdf_bytes: bytes) -> None:
        with pytest.raises(DocumentNotReadyError):
            rasterizer.render(_document(sample_pdf_bytes, 0), 1, 1.0)

    def test_render_rejects_non_positive_scale(
        self, rasterizer: BasePageRasterizer, sample_pdf_bytes: bytes
    ) -> None:
        with pytest.raises(ValueError, match="scale"):
            rasterizer.render(_document(sample_pdf_bytes, 1), 1, 0)

    def test_render_corrupt_content_raises(self, rasterizer: BasePageRasterizer) -> None:
        with pytest.raises(RenderError):
            rasterizer.render(_document(b"%PDF-broken", 1), 1, 1.0)
