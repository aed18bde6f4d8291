from resumecraft.config.settings import Settings
from resumecraft.pdf.base import BasePageRasterizer
from resumecraft.pdf.pdfplumber_adapter import PdfPlumberRasterizer
from resumecraft.pdf.pymupdf_adapter import PyMuPdfRasterizer


class RasterizerFactory:
    """Creates the page rasterizer named by settings.pdf_engine."""

    ADAPTERS: dict[str, type[BasePageRasterizer]] = {
        "pymupdf": PyMuPdfRasterizer,
        "pdfplumber": PdfPlumberRasterizer,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePageRasterizer:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
