import io

import pdfplumber
from PIL import Image

from resumecraft.pdf.base import BasePageRasterizer
from resumecraft.pdf.exceptions import RenderError

_POINTS_PER_INCH = 72


class PdfPlumberRasterizer(BasePageRasterizer):
    """Rasterizes PDF pages using pdfplumber page images."""

    def count_pages(self, pdf_bytes: bytes) -> int:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return len(pdf.pages)
        except Exception as exc:
            raise RenderError(f"pdfplumber could not open document: {exc}") from exc

    def _render_page(self, pdf_bytes: bytes, page_index: int, scale: float) -> Image.Image:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page_image = pdf.pages[page_index].to_image(
                    resolution=_POINTS_PER_INCH * scale
                )
                return page_image.original.convert("RGB")
        except Exception as exc:
            raise RenderError(
                f"pdfplumber failed to render page {page_index + 1}: {exc}"
            ) from exc

    def _page_size(self, pdf_bytes: bytes, page_index: int) -> tuple[float, float]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page = pdf.pages[page_index]
                return float(page.width), float(page.height)
        except Exception as exc:
            raise RenderError(
                f"pdfplumber failed to read page {page_index + 1}: {exc}"
            ) from exc
