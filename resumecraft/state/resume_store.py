import itertools
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

from resumecraft.documents.models import DisplayHandle
from resumecraft.logging.logger import Log


@dataclass(frozen=True)
class Resume:
    """An extracted resume kept for the lifetime of the session."""

    id: int
    file_name: str
    text: str
    created_at: datetime
    display_handle: DisplayHandle


class ResumeStore:
    """In-memory, insertion-ordered collection of extracted resumes.

    The store owns one reference on each resume's display handle and drops it
    on delete; views that still show the resume keep the bytes alive through
    their own reference.
    """

    def __init__(self) -> None:
        self._resumes: dict[int, Resume] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, file_name: str, text: str, display_handle: DisplayHandle) -> Resume:
        with self._lock:
            resume = Resume(
                id=next(self._ids),
                file_name=file_name,
                text=text,
                created_at=datetime.now(timezone.utc),
                display_handle=display_handle.acquire(),
            )
            self._resumes[resume.id] = resume
        Log.info(f"Stored resume {resume.id} ({file_name}, {len(text)} chars)")
        return resume

    def delete(self, resume_id: int) -> None:
        """Remove a resume; unknown ids are ignored."""
        with self._lock:
            resume = self._resumes.pop(resume_id, None)
        if resume is None:
            return
        resume.display_handle.release()
        Log.info(f"Deleted resume {resume_id}")

    def get(self, resume_id: int) -> Resume | None:
        return self._resumes.get(resume_id)

    def list(self) -> list[Resume]:
        return list(self._resumes.values())

    def __len__(self) -> int:
        return len(self._resumes)
