from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass

from PIL import Image


@dataclass(frozen=True)
class RecognitionUpdate:
    """One step of a page recognition.

    ``fraction`` is the share of the page already recognized, in [0, 1].
    The final update has ``done=True`` and carries the page text.
    """

    fraction: float
    text: str = ""
    done: bool = False


class BaseTextRecognizer(ABC):
    """Contract for all OCR adapters."""

    @abstractmethod
    def recognize_stream(self, image: Image.Image, language: str) -> Iterator[RecognitionUpdate]:
        """Recognize the text of one page image, yielding progress as it goes.

        Args:
            image: RGB page raster.
            language: Recognition language code, e.g. "en".

        Yields:
            Progress updates followed by exactly one terminal update.

        Raises:
            RecognitionError: on any failure.
        """

    def recognize(self, image: Image.Image, language: str) -> str:
        """Recognize a page and return only its text."""
        text = ""
        for update in self.recognize_stream(image, language):
            if update.done:
                text = update.text
        return text
