import pytest

from resumecraft.config.settings import Settings
from resumecraft.pdf.factory import RasterizerFactory
from resumecraft.pdf.pdfplumber_adapter import PdfPlumberRasterizer
from resumecraft.pdf.pymupdf_adapter import PyMuPdfRasterizer


class TestRasterizerFactory:
    def test_creates_pymupdf_adapter(self) -> None:
        settings = Settings(pdf_engine="pymupdf")
        assert isinstance(RasterizerFactory.create(settings), PyMuPdfRasterizer)

    def test_creates_pdfplumber_adapter(self) -> None:
        settings = Settings(pdf_engine="pdfplumber")
        assert isinstance(RasterizerFactory.create(settings), PdfPlumberRasterizer)

    def test_engine_name_is_case_insensitive(self) -> None:
        settings = Settings(pdf_engine="PyMuPDF")
        assert isinstance(RasterizerFactory.create(settings), PyMuPdfRasterizer)

    def test_unknown_engine_raises(self) -> None:
        settings = Settings(pdf_engine="nonexistent")
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            RasterizerFactory.create(settings)
