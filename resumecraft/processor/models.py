from dataclasses import dataclass, field
from enum import Enum

from resumecraft.state.resume_store import Resume


def page_marker(page_number: int) -> str:
    return f"---- Page {page_number} ----"


class ExtractionState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    EXTRACTING = "extracting"
    COMPLETE = "complete"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class ExtractionResult:
    """Per-page recognized text, kept in ascending page order."""

    pages: list[tuple[int, str]] = field(default_factory=list)

    def add_page(self, page_number: int, text: str) -> None:
        expected = len(self.pages) + 1
        if page_number != expected:
            raise ValueError(f"Expected page {expected}, got page {page_number}")
        self.pages.append((page_number, text))

    @property
    def text(self) -> str:
        return "".join(
            f"{page_marker(number)}\n\n{text}\n\n" for number, text in self.pages
        )


@dataclass(frozen=True)
class ProgressEvent:
    page: int
    percent: int


@dataclass(frozen=True)
class PageExtracted:
    page: int
    text: str
    partial_text: str


@dataclass(frozen=True)
class PageFailed:
    page: int
    error: Exception


@dataclass(frozen=True)
class ExtractionCompleted:
    result: ExtractionResult
    resume: Resume

    @property
    def text(self) -> str:
        return self.result.text


@dataclass(frozen=True)
class ExtractionFailed:
    error: Exception
    partial_text: str


@dataclass(frozen=True)
class ExtractionCancelled:
    partial_text: str


ExtractionEvent = (
    ProgressEvent
    | PageExtracted
    | PageFailed
    | ExtractionCompleted
    | ExtractionFailed
    | ExtractionCancelled
)


@dataclass
class ExtractionOutcome:
    """Everything a consumer folds out of one extraction run."""

    state: ExtractionState
    text: str = ""
    progress: int = 0
    resume: Resume | None = None
    error: Exception | None = None
    failed_pages: list[int] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is ExtractionState.COMPLETE
