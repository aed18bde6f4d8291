from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    recognition_scale: float = Field(default=2.0, gt=0)

    ocr_engine: str = "easyocr"
    ocr_language: str = "en"
    ocr_gpu: bool = False

    page_failure_policy: Literal["abort", "skip"] = "abort"

    initial_credits: int = Field(default=100, ge=0)
    extraction_cost: int = Field(default=10, ge=0)

    generation_provider: str = "gemini"
    tailoring_model: str = "gemini-1.5-flash"
    insights_model: str = "gemini-1.5-flash"

    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_seconds: int = 60

    openai_api_key: str = ""
    openai_base_url: str | None = None
    openai_timeout_seconds: int = 60
    openai_temperature: float = 0.7
