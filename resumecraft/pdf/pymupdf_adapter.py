import pymupdf
from PIL import Image

from resumecraft.pdf.base import BasePageRasterizer
from resumecraft.pdf.exceptions import RenderError


class PyMuPdfRasterizer(BasePageRasterizer):
    """Rasterizes PDF pages using PyMuPDF."""

    def count_pages(self, pdf_bytes: bytes) -> int:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return int(doc.page_count)
        except Exception as exc:
            raise RenderError(f"pymupdf could not open document: {exc}") from exc

    def _render_page(self, pdf_bytes: bytes, page_index: int, scale: float) -> Image.Image:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pix = doc[page_index].get_pixmap(
                    matrix=pymupdf.Matrix(scale, scale), alpha=False
                )
                if pix.n != 3:
                    pix = pymupdf.Pixmap(pymupdf.csRGB, pix)
                return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        except Exception as exc:
            raise RenderError(
                f"pymupdf failed to render page {page_index + 1}: {exc}"
            ) from exc

    def _page_size(self, pdf_bytes: bytes, page_index: int) -> tuple[float, float]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                rect = doc[page_index].rect
                return float(rect.width), float(rect.height)
        except Exception as exc:
            raise RenderError(
                f"pymupdf failed to read page {page_index + 1}: {exc}"
            ) from exc
