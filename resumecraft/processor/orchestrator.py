"""Extraction pipeline: rasterize each page, OCR it, accumulate, persist.

``ExtractionOrchestrator.extract`` returns a generator of events so the
pipeline stays independent of whoever displays it; ``run`` folds the same
stream into an ``ExtractionOutcome``.

State machine::

    IDLE -> LOADING -> READY -> EXTRACTING -> COMPLETE | FAILED | CANCELLED
"""

import math
import threading
from collections.abc import Callable, Iterator
from typing import Literal

from resumecraft.documents.exceptions import DocumentNotReadyError
from resumecraft.documents.loader import DocumentLoader
from resumecraft.documents.models import Document, SourceFile
from resumecraft.logging.logger import Log
from resumecraft.ocr.base import BaseTextRecognizer
from resumecraft.ocr.exceptions import RecognitionError
from resumecraft.pdf.base import BasePageRasterizer
from resumecraft.pdf.exceptions import RenderError
from resumecraft.processor.exceptions import (
    ExtractionCancelledError,
    ExtractionInProgressError,
)
from resumecraft.processor.models import (
    ExtractionCancelled,
    ExtractionCompleted,
    ExtractionEvent,
    ExtractionFailed,
    ExtractionOutcome,
    ExtractionResult,
    ExtractionState,
    PageExtracted,
    PageFailed,
    ProgressEvent,
)
from resumecraft.state.ledger import CreditLedger
from resumecraft.state.resume_store import Resume, ResumeStore

PageFailurePolicy = Literal["abort", "skip"]


def compose_progress(page_number: int, page_fraction: float, total_pages: int) -> int:
    """Overall job percentage while ``page_number`` of ``total_pages`` is running."""
    fraction = min(max(page_fraction, 0.0), 1.0)
    return math.floor(((page_number - 1) + fraction) / total_pages * 100)


def fold_event(outcome: ExtractionOutcome, event: ExtractionEvent) -> ExtractionOutcome:
    """Apply one pipeline event to a consumer-side outcome."""
    if isinstance(event, ProgressEvent):
        outcome.progress = max(outcome.progress, event.percent)
    elif isinstance(event, PageExtracted):
        outcome.text = event.partial_text
    elif isinstance(event, PageFailed):
        outcome.failed_pages.append(event.page)
    elif isinstance(event, ExtractionCompleted):
        outcome.state = ExtractionState.COMPLETE
        outcome.text = event.text
        outcome.resume = event.resume
    elif isinstance(event, ExtractionFailed):
        outcome.state = ExtractionState.FAILED
        outcome.text = event.partial_text
        outcome.error = event.error
    elif isinstance(event, ExtractionCancelled):
        outcome.state = ExtractionState.CANCELLED
        outcome.text = event.partial_text
    return outcome


class ExtractionOrchestrator:
    """Runs credit-gated OCR extraction over every page of a document."""

    def __init__(
        self,
        *,
        loader: DocumentLoader,
        rasterizer: BasePageRasterizer,
        recognizer: BaseTextRecognizer,
        ledger: CreditLedger,
        store: ResumeStore,
        cost: int = 10,
        recognition_scale: float = 2.0,
        language: str = "en",
        page_failure_policy: PageFailurePolicy = "abort",
    ) -> None:
        self._loader = loader
        self._rasterizer = rasterizer
        self._recognizer = recognizer
        self._ledger = ledger
        self._store = store
        self._cost = cost
        self._scale = recognition_scale
        self._language = language
        self._page_failure_policy = page_failure_policy
        self._state = ExtractionState.IDLE
        self._result = ExtractionResult()
        self._run_lock = threading.Lock()
        self._cancel_requested = threading.Event()

    @property
    def state(self) -> ExtractionState:
        return self._state

    @property
    def cost(self) -> int:
        return self._cost

    @property
    def partial_text(self) -> str:
        """Text accumulated by the current or last run."""
        return self._result.text

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    def load(self, source: SourceFile) -> Document:
        """Open a picked file and resolve its page count. Never starts extraction.

        Raises:
            ExtractionInProgressError: while a run is active.
            InvalidFormatError: before any state change, for non-PDF input.
            DocumentLoadError: when the PDF cannot be read (state -> FAILED).
        """
        if self.is_running:
            raise ExtractionInProgressError("Cannot load a document while extracting")
        document = self._loader.open(source)
        self._state = ExtractionState.LOADING
        self._result = ExtractionResult()
        try:
            self._loader.resolve_pages(document)
        except Exception:
            document.handle.release()
            self._state = ExtractionState.FAILED
            raise
        self._state = ExtractionState.READY
        return document

    def extract(self, document: Document) -> Iterator[ExtractionEvent]:
        """Check the preconditions and return the event stream of a new run.

        The checks run synchronously and leave state untouched when they fail.

        Raises:
            DocumentNotReadyError: if the page count is not resolved.
            ExtractionInProgressError: if another run holds the run lock.
            InsufficientCreditsError: if the ledger cannot cover the cost.
        """
        if not document.is_ready:
            raise DocumentNotReadyError(
                f"'{document.file_name}' has not finished loading"
            )
        if self.is_running:
            raise ExtractionInProgressError("An extraction is already running")
        self._ledger.ensure(self._cost)
        return self._run(document)

    def run(
        self,
        document: Document,
        on_event: Callable[[ExtractionEvent], None] | None = None,
    ) -> ExtractionOutcome:
        """Drive a full run, forwarding every event to ``on_event``."""
        outcome = ExtractionOutcome(state=ExtractionState.EXTRACTING)
        for event in self.extract(document):
            if on_event is not None:
                on_event(event)
            fold_event(outcome, event)
        outcome.state = self._state
        return outcome

    def cancel(self) -> None:
        """Ask the active run to stop at its next page or progress step."""
        if self.is_running:
            Log.info("Cancellation requested")
            self._cancel_requested.set()

    def _run(self, document: Document) -> Iterator[ExtractionEvent]:
        if not self._run_lock.acquire(blocking=False):
            raise ExtractionInProgressError("An extraction is already running")
        self._cancel_requested.clear()
        self._state = ExtractionState.EXTRACTING
        self._result = result = ExtractionResult()
        total = document.page_count
        last_percent = 0
        Log.info(f"Extracting '{document.file_name}': {total} pages")
        try:
            yield ProgressEvent(page=1, percent=0)
            for page_number in range(1, total + 1):
                self._check_cancelled()
                try:
                    text = ""
                    image = self._rasterizer.render(document, page_number, self._scale)
                    for update in self._recognizer.recognize_stream(image, self._language):
                        self._check_cancelled()
                        percent = compose_progress(page_number, update.fraction, total)
                        if percent > last_percent:
                            last_percent = percent
                            yield ProgressEvent(page=page_number, percent=percent)
                        if update.done:
                            text = update.text
                except (RenderError, RecognitionError) as exc:
                    if self._page_failure_policy != "skip":
                        raise
                    Log.warning(f"Skipping page {page_number}: {exc}")
                    result.add_page(page_number, "")
                    yield PageFailed(page=page_number, error=exc)
                    continue
                result.add_page(page_number, text)
                Log.debug(f"Page {page_number}/{total}: {len(text)} chars")
                yield PageExtracted(page=page_number, text=text, partial_text=result.text)

            resume = self._persist(document, result)
            self._state = ExtractionState.COMPLETE
            if last_percent < 100:
                yield ProgressEvent(page=total, percent=100)
            yield ExtractionCompleted(result=result, resume=resume)
        except ExtractionCancelledError:
            self._state = ExtractionState.CANCELLED
            Log.info(f"Extraction of '{document.file_name}' cancelled")
            yield ExtractionCancelled(partial_text=result.text)
        except GeneratorExit:
            if self._state is ExtractionState.EXTRACTING:
                self._state = ExtractionState.CANCELLED
            raise
        except Exception as exc:
            self._state = ExtractionState.FAILED
            Log.error(f"Extraction of '{document.file_name}' failed: {exc}")
            yield ExtractionFailed(error=exc, partial_text=result.text)
        finally:
            self._run_lock.release()

    def _persist(self, document: Document, result: ExtractionResult) -> Resume:
        """Store the resume, then debit; a failed debit removes the resume again."""
        resume = self._store.add(document.file_name, result.text, document.handle)
        try:
            self._ledger.debit(self._cost)
        except Exception:
            self._store.delete(resume.id)
            raise
        Log.info(f"Extraction of '{document.file_name}' complete (resume {resume.id})")
        return resume

    def _check_cancelled(self) -> None:
        if self._cancel_requested.is_set():
            raise ExtractionCancelledError("Extraction cancelled")
