import io
import re
from datetime import date
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from resumecraft.export.exceptions import ExportError
from resumecraft.logging.logger import Log

_MARKDOWN_RE = re.compile(r"[#*`_]")


def strip_markdown(text: str) -> str:
    return _MARKDOWN_RE.sub("", text)


def default_file_name(today: date | None = None) -> str:
    today = today or date.today()
    return f"tailored-resume-{today.isoformat()}.pdf"


class ResumePdfExporter:
    """Lays out generated resume text as a paginated PDF."""

    TITLE = "Generated Resume"
    FONT = "Helvetica"
    TITLE_FONT_SIZE = 16
    BODY_FONT_SIZE = 12
    LINE_SPACING = 1.15

    def __init__(self, *, margin: float = 20 * mm, page_size: tuple[float, float] = A4) -> None:
        self._margin = margin
        self._page_width, self._page_height = page_size

    @property
    def line_height(self) -> float:
        return self.BODY_FONT_SIZE * self.LINE_SPACING

    def wrap(self, text: str) -> list[str]:
        """Split plain text into lines that fit the usable page width."""
        usable_width = self._page_width - 2 * self._margin
        lines: list[str] = []
        for paragraph in strip_markdown(text).splitlines():
            if not paragraph.strip():
                lines.append("")
                continue
            lines.extend(simpleSplit(paragraph, self.FONT, self.BODY_FONT_SIZE, usable_width))
        return lines

    def render(self, text: str) -> bytes:
        """Return the PDF bytes for ``text``.

        Raises:
            ExportError: if reportlab fails to produce the document.
        """
        buf = io.BytesIO()
        try:
            pdf = canvas.Canvas(buf, pagesize=(self._page_width, self._page_height))
            pdf.setTitle(self.TITLE)
            top = self._page_height - self._margin

            pdf.setFont(self.FONT, self.TITLE_FONT_SIZE)
            pdf.drawString(self._margin, top, self.TITLE)
            pdf.setFont(self.FONT, self.BODY_FONT_SIZE)

            # reportlab measures y from the bottom edge
            y = top - 2 * self.line_height
            for line in self.wrap(text):
                if y < self._margin:
                    pdf.showPage()
                    pdf.setFont(self.FONT, self.BODY_FONT_SIZE)
                    y = top
                pdf.drawString(self._margin, y, line)
                y -= self.line_height
            pdf.save()
        except Exception as exc:
            raise ExportError(f"PDF export failed: {exc}") from exc
        return buf.getvalue()

    def export(self, text: str, path: Path) -> Path:
        """Write the PDF for ``text``; a directory gets the default file name."""
        if path.is_dir():
            path = path / default_file_name()
        data = self.render(text)
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise ExportError(f"Cannot write {path}: {exc}") from exc
        Log.info(f"Exported tailored resume to {path} ({len(data)} bytes)")
        return path
