from resumecraft.config.settings import Settings
from resumecraft.ocr.base import BaseTextRecognizer
from resumecraft.ocr.easyocr_adapter import EasyOcrAdapter


class RecognizerFactory:
    """Creates the OCR adapter named by settings.ocr_engine."""

    @classmethod
    def create(cls, settings: Settings) -> BaseTextRecognizer:
        engine = settings.ocr_engine.lower()
        if engine == "easyocr":
            return EasyOcrAdapter(gpu=settings.ocr_gpu)
        raise ValueError(f"Unknown OCR engine '{engine}'. Choose from: ['easyocr']")
