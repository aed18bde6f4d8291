from abc import ABC, abstractmethod

from PIL import Image

from resumecraft.documents.models import Document


class BasePageRasterizer(ABC):
    """Contract for all PDF page rasterization adapters.

    Page numbers are 1-based. ``scale`` multiplies the page's size in PDF
    points (72 per inch), so scale 2.0 renders at 144 dpi.
    """

    def render(self, document: Document, page_number: int, scale: float) -> Image.Image:
        """Render one page to an RGB image.

        Raises:
            DocumentNotReadyError: if the page count is not resolved yet.
            PageOutOfRangeError: if ``page_number`` is outside 1..page_count.
            ValueError: if ``scale`` is not positive.
            RenderError: if the page data cannot be rendered.
        """
        document.require_page(page_number)
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        return self._render_page(document.content, page_number - 1, scale)

    def page_size(self, document: Document, page_number: int) -> tuple[float, float]:
        """Return (width, height) of a page in PDF points."""
        document.require_page(page_number)
        return self._page_size(document.content, page_number - 1)

    @abstractmethod
    def count_pages(self, pdf_bytes: bytes) -> int:
        """Return the number of pages.

        Raises:
            RenderError: if the bytes are not a readable PDF.
        """

    @abstractmethod
    def _render_page(self, pdf_bytes: bytes, page_index: int, scale: float) -> Image.Image:
        """Rasterize the page at 0-based ``page_index``."""

    @abstractmethod
    def _page_size(self, pdf_bytes: bytes, page_index: int) -> tuple[float, float]:
        """Return the page's (width, height) in points."""
