from collections.abc import Callable
from pathlib import Path
from types import TracebackType

from PIL import Image

from resumecraft.config.settings import Settings
from resumecraft.documents.exceptions import DocumentNotReadyError
from resumecraft.documents.loader import DocumentLoader
from resumecraft.documents.models import Document, SourceFile
from resumecraft.export.exceptions import ExportError
from resumecraft.export.pdf_exporter import ResumePdfExporter
from resumecraft.generation.client_base import BaseGenerationClient
from resumecraft.generation.exceptions import NoResumeSelectedError
from resumecraft.generation.factory import GenerationClientFactory
from resumecraft.generation.insights import InsightRequestor
from resumecraft.generation.models import AtsInsights, CombinedInsights, ResumeInsights
from resumecraft.generation.tailor import Tailor
from resumecraft.logging.logger import Log
from resumecraft.ocr.factory import RecognizerFactory
from resumecraft.pdf.base import BasePageRasterizer
from resumecraft.pdf.factory import RasterizerFactory
from resumecraft.processor.exceptions import ExtractionInProgressError
from resumecraft.processor.models import ExtractionEvent, ExtractionOutcome, ProgressEvent
from resumecraft.processor.orchestrator import ExtractionOrchestrator
from resumecraft.state.exceptions import ResumeNotFoundError
from resumecraft.state.ledger import CreditLedger
from resumecraft.state.resume_store import Resume, ResumeStore


class ResumeSession:
    """State owned by one user session: the open document, credits, resumes.

    Every consumer gets the ledger and store through this object; nothing is
    kept after ``close``.
    """

    def __init__(
        self,
        *,
        orchestrator: ExtractionOrchestrator,
        rasterizer: BasePageRasterizer,
        ledger: CreditLedger,
        store: ResumeStore,
        client: BaseGenerationClient,
        tailor: Tailor,
        insight_requestor: InsightRequestor,
        exporter: ResumePdfExporter,
    ) -> None:
        self._orchestrator = orchestrator
        self._rasterizer = rasterizer
        self._ledger = ledger
        self._store = store
        self._client = client
        self._tailor = tailor
        self._insight_requestor = insight_requestor
        self._exporter = exporter

        self.document: Document | None = None
        self.extracted_text = ""
        self.progress = 0
        self.viewed_resume: Resume | None = None
        self.generated_resume = ""
        self.insights = CombinedInsights()

    @property
    def ledger(self) -> CreditLedger:
        return self._ledger

    @property
    def store(self) -> ResumeStore:
        return self._store

    @property
    def credits(self) -> int:
        return self._ledger.balance

    # -- document -----------------------------------------------------------

    def select(self, source: SourceFile) -> Document:
        """Replace the open document with ``source``.

        The type is checked first so a rejected file leaves the current
        document untouched.
        """
        DocumentLoader.validate(source)
        if self._orchestrator.is_running:
            raise ExtractionInProgressError("Cannot select a document while extracting")
        self._release_document()
        self.extracted_text = ""
        self.progress = 0
        self.insights = CombinedInsights()
        self.document = self._orchestrator.load(source)
        return self.document

    def preview(self, page_number: int, container_width: float) -> Image.Image:
        """Render a page scaled to fit ``container_width`` pixels."""
        document = self._require_document()
        page_width, _ = self._rasterizer.page_size(document, page_number)
        return self._rasterizer.render(document, page_number, container_width / page_width)

    def extract(
        self,
        on_event: Callable[[ExtractionEvent], None] | None = None,
    ) -> ExtractionOutcome:
        """Run OCR extraction on the open document.

        Raises:
            InsufficientCreditsError: if the ledger cannot cover the run.
            ExtractionInProgressError: if a run is already active.
        """
        document = self._require_document()

        def _track(event: ExtractionEvent) -> None:
            if isinstance(event, ProgressEvent):
                self.progress = event.percent
            if on_event is not None:
                on_event(event)

        outcome = self._orchestrator.run(document, on_event=_track)
        self.extracted_text = outcome.text
        self.progress = outcome.progress
        return outcome

    def cancel_extraction(self) -> None:
        self._orchestrator.cancel()

    # -- stored resumes -----------------------------------------------------

    def resumes(self) -> list[Resume]:
        return self._store.list()

    def view_resume(self, resume_id: int) -> Resume:
        """Show a stored resume, holding its display handle while viewed."""
        resume = self._store.get(resume_id)
        if resume is None:
            raise ResumeNotFoundError(f"Resume {resume_id} not found")
        resume.display_handle.acquire()
        self._release_view()
        self.viewed_resume = resume
        return resume

    def delete_resume(self, resume_id: int) -> None:
        self._store.delete(resume_id)

    # -- generation ---------------------------------------------------------

    def tailor(self, resume_id: int | None, job_description: str) -> str:
        """Tailor a stored resume to ``job_description``."""
        if resume_id is None:
            raise NoResumeSelectedError("Please select a resume first")
        resume = self._store.get(resume_id)
        if resume is None:
            raise NoResumeSelectedError("Selected resume not found or has no content")
        self.generated_resume = self._tailor.tailor(resume.text, job_description)
        return self.generated_resume

    def request_insights(self, text: str | None = None) -> ResumeInsights:
        result = self._insight_requestor.insights(text if text is not None else self.extracted_text)
        self.insights = self.insights.with_insights(result)
        return result

    def request_ats_insights(self, text: str | None = None) -> AtsInsights:
        result = self._insight_requestor.ats_insights(
            text if text is not None else self.extracted_text
        )
        self.insights = self.insights.with_ats(result)
        return result

    def export_tailored(self, path: Path) -> Path:
        if not self.generated_resume:
            raise ExportError("No generated resume to export")
        return self._exporter.export(self.generated_resume, path)

    # -- lifecycle ----------------------------------------------------------

    def close(self) -> None:
        """Release every display handle and the generation client."""
        self._orchestrator.cancel()
        self._release_document()
        self._release_view()
        self._client.close()

    def __enter__(self) -> "ResumeSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_document(self) -> Document:
        if self.document is None:
            raise DocumentNotReadyError("No document selected")
        return self.document

    def _release_document(self) -> None:
        if self.document is not None:
            self.document.handle.release()
            self.document = None

    def _release_view(self) -> None:
        if self.viewed_resume is not None:
            self.viewed_resume.display_handle.release()
            self.viewed_resume = None


def build_session(settings: Settings) -> ResumeSession:
    """Build a ResumeSession with all adapters chosen by settings."""
    rasterizer = RasterizerFactory.create(settings)
    recognizer = RecognizerFactory.create(settings)
    client = GenerationClientFactory.create(settings)
    ledger = CreditLedger(settings.initial_credits)
    store = ResumeStore()
    orchestrator = ExtractionOrchestrator(
        loader=DocumentLoader(rasterizer),
        rasterizer=rasterizer,
        recognizer=recognizer,
        ledger=ledger,
        store=store,
        cost=settings.extraction_cost,
        recognition_scale=settings.recognition_scale,
        language=settings.ocr_language,
        page_failure_policy=settings.page_failure_policy,
    )
    Log.info(
        f"Session ready: pdf_engine={settings.pdf_engine}, ocr_engine={settings.ocr_engine}, "
        f"generation_provider={settings.generation_provider}, credits={ledger.balance}"
    )
    return ResumeSession(
        orchestrator=orchestrator,
        rasterizer=rasterizer,
        ledger=ledger,
        store=store,
        client=client,
        tailor=Tailor(client=client, model=settings.tailoring_model),
        insight_requestor=InsightRequestor(client=client, model=settings.insights_model),
        exporter=ResumePdfExporter(),
    )
