import mimetypes
import threading
import uuid
from dataclasses import dataclass
from pathlib import Path

from resumecraft.documents.exceptions import (
    DocumentNotReadyError,
    HandleReleasedError,
    PageOutOfRangeError,
)

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class SourceFile:
    """A file as picked or dropped by the user: name, declared type, bytes."""

    file_name: str
    mime_type: str
    content: bytes

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "SourceFile":
        """Read a file from disk, guessing its declared type from the name."""
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            file_name=path.name,
            mime_type=mime_type or "application/octet-stream",
            content=path.read_bytes(),
        )


class DisplayHandle:
    """Revocable, reference-counted handle over a document's bytes.

    The handle starts with one reference owned by its creator. Every other
    holder (the resume store, a view) calls ``acquire`` and later ``release``;
    the bytes are dropped once the last reference goes away.
    """

    def __init__(self, data: bytes) -> None:
        self.id = uuid.uuid4().hex
        self._data: bytes | None = data
        self._refs = 1
        self._lock = threading.Lock()

    @property
    def data(self) -> bytes:
        if self._data is None:
            raise HandleReleasedError(f"Display handle {self.id} has been released")
        return self._data

    @property
    def is_released(self) -> bool:
        return self._data is None

    @property
    def ref_count(self) -> int:
        return self._refs

    def acquire(self) -> "DisplayHandle":
        with self._lock:
            if self._data is None:
                raise HandleReleasedError(f"Display handle {self.id} has been released")
            self._refs += 1
        return self

    def release(self) -> None:
        """Drop one reference; releasing an already released handle is a no-op."""
        with self._lock:
            if self._data is None:
                return
            self._refs -= 1
            if self._refs <= 0:
                self._refs = 0
                self._data = None

    def __repr__(self) -> str:
        state = "released" if self.is_released else f"refs={self._refs}"
        return f"DisplayHandle({self.id[:8]}, {state})"


@dataclass
class Document:
    """A loaded PDF. ``page_count`` stays 0 until the loader resolves it."""

    file_name: str
    content: bytes
    handle: DisplayHandle
    page_count: int = 0

    @property
    def is_ready(self) -> bool:
        return self.page_count > 0

    def require_page(self, page_number: int) -> None:
        """Fail fast unless ``page_number`` is a valid 1-based page."""
        if not self.is_ready:
            raise DocumentNotReadyError(
                f"Page count of '{self.file_name}' is not known yet"
            )
        if not 1 <= page_number <= self.page_count:
            raise PageOutOfRangeError(
                f"Page {page_number} is out of range 1..{self.page_count}"
            )
