"""EasyOCR-backed text recognition.

EasyOCR's ``readtext`` offers no progress hook, so the adapter runs the two
halves itself: one ``detect`` pass to find text boxes, then ``recognize`` box
by box in reading order, reporting the share of boxes done after each one.
"""

from collections.abc import Iterator
from typing import Any

import easyocr  # type: ignore[import-untyped]
import numpy as np
from PIL import Image

from resumecraft.logging.logger import Log
from resumecraft.ocr.base import BaseTextRecognizer, RecognitionUpdate
from resumecraft.ocr.exceptions import RecognitionError

# y_min distance (px) under which two boxes count as the same text line
_LINE_TOLERANCE = 10


def group_lines(boxes: list[Any], tolerance: float = _LINE_TOLERANCE) -> list[list[Any]]:
    """Group [x_min, x_max, y_min, y_max] boxes into text lines.

    Lines come out top-to-bottom, boxes within a line left-to-right.
    """
    lines: list[list[Any]] = []
    line_top: float | None = None
    for box in sorted(boxes, key=lambda b: float(b[2])):
        top = float(box[2])
        if line_top is None or top - line_top > tolerance:
            lines.append([])
            line_top = top
        lines[-1].append(box)
    return [sorted(line, key=lambda b: float(b[0])) for line in lines]


class EasyOcrAdapter(BaseTextRecognizer):
    """Recognizes page text with EasyOCR, one reader per language."""

    def __init__(self, *, gpu: bool = False) -> None:
        self._gpu = gpu
        self._readers: dict[str, Any] = {}

    def recognize_stream(self, image: Image.Image, language: str) -> Iterator[RecognitionUpdate]:
        try:
            reader = self._get_reader(language)
            # easyocr treats 3-channel input as BGR; hand it the grey page once
            grey = np.array(image.convert("L"))
            horizontal_list, free_list = reader.detect(grey)
        except Exception as exc:
            raise RecognitionError(f"easyocr text detection failed: {exc}") from exc

        line_boxes = group_lines(horizontal_list[0] if horizontal_list else [])
        free_boxes = free_list[0] if free_list else []
        total = sum(len(line) for line in line_boxes) + len(free_boxes)
        Log.debug(f"easyocr detected {total} text boxes")

        yield RecognitionUpdate(fraction=0.0)
        lines: list[str] = []
        done_count = 0

        for line in line_boxes:
            fragments = []
            for box in line:
                fragment = self._recognize_box(reader, grey, horizontal=[box], free=[])
                if fragment:
                    fragments.append(fragment)
                done_count += 1
                yield RecognitionUpdate(fraction=done_count / total)
            if fragments:
                lines.append(" ".join(fragments))

        for box in free_boxes:
            fragment = self._recognize_box(reader, grey, horizontal=[], free=[box])
            if fragment:
                lines.append(fragment)
            done_count += 1
            yield RecognitionUpdate(fraction=done_count / total)

        yield RecognitionUpdate(fraction=1.0, text="\n".join(lines), done=True)

    def _get_reader(self, language: str) -> Any:
        reader = self._readers.get(language)
        if reader is None:
            Log.info(f"Initializing easyocr reader for '{language}' (gpu={self._gpu})")
            reader = easyocr.Reader([language], gpu=self._gpu)
            self._readers[language] = reader
        return reader

    @staticmethod
    def _recognize_box(
        reader: Any,
        grey: np.ndarray,
        *,
        horizontal: list[Any],
        free: list[Any],
    ) -> str:
        try:
            fragments = reader.recognize(
                grey,
                horizontal_list=horizontal,
                free_list=free,
                detail=0,
                reformat=False,
            )
        except Exception as exc:
            raise RecognitionError(f"easyocr recognition failed: {exc}") from exc
        return " ".join(str(f).strip() for f in fragments if str(f).strip())
