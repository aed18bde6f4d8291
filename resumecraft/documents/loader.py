from resumecraft.documents.exceptions import DocumentLoadError, InvalidFormatError
from resumecraft.documents.models import PDF_MIME_TYPE, DisplayHandle, Document, SourceFile
from resumecraft.logging.logger import Log
from resumecraft.pdf.base import BasePageRasterizer
from resumecraft.pdf.exceptions import RenderError


class DocumentLoader:
    """Validates a picked file and turns it into a Document with a page count."""

    ACCEPTED_MIME_TYPE = PDF_MIME_TYPE

    def __init__(self, rasterizer: BasePageRasterizer) -> None:
        self._rasterizer = rasterizer

    @classmethod
    def validate(cls, source: SourceFile) -> None:
        """Raise InvalidFormatError unless the file declares itself a PDF."""
        if source.mime_type != cls.ACCEPTED_MIME_TYPE:
            raise InvalidFormatError(
                f"'{source.file_name}' is '{source.mime_type}', "
                f"expected '{cls.ACCEPTED_MIME_TYPE}'"
            )

    def open(self, source: SourceFile) -> Document:
        """Check the declared type and allocate a display handle.

        The returned document has ``page_count == 0`` until ``resolve_pages``
        runs.

        Raises:
            InvalidFormatError: if the declared type is not application/pdf.
        """
        self.validate(source)
        return Document(
            file_name=source.file_name,
            content=source.content,
            handle=DisplayHandle(source.content),
        )

    def resolve_pages(self, document: Document) -> Document:
        """Determine the page count of an opened document.

        Raises:
            DocumentLoadError: if the bytes are not a readable PDF.
        """
        try:
            page_count = self._rasterizer.count_pages(document.content)
        except RenderError as exc:
            raise DocumentLoadError(f"Cannot open '{document.file_name}': {exc}") from exc
        if page_count < 1:
            raise DocumentLoadError(f"'{document.file_name}' has no pages")
        document.page_count = page_count
        Log.info(f"Loaded '{document.file_name}': {page_count} pages")
        return document

    def load(self, source: SourceFile) -> Document:
        document = self.open(source)
        try:
            return self.resolve_pages(document)
        except DocumentLoadError:
            document.handle.release()
            raise
