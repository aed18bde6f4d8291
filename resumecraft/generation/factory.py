from resumecraft.config.settings import Settings
from resumecraft.generation.client_base import BaseGenerationClient
from resumecraft.generation.example_client_adapter import ExampleClientAdapter
from resumecraft.generation.gemini_client_adapter import GeminiClientAdapter
from resumecraft.generation.openai_client_adapter import OpenAIClientAdapter
from resumecraft.logging.logger import Log


class GenerationClientFactory:
    """Creates the generative-text client named by settings.generation_provider."""

    PROVIDERS = ("gemini", "openai", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseGenerationClient:
        provider = settings.generation_provider.lower()
        if provider == "gemini":
            if not settings.gemini_api_key:
                Log.warning("gemini_api_key is empty; generation requests will be rejected")
            return GeminiClientAdapter(
                api_key=settings.gemini_api_key,
                timeout_seconds=settings.gemini_timeout_seconds,
                base_url=settings.gemini_base_url,
            )
        if provider == "openai":
            return OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                timeout_seconds=settings.openai_timeout_seconds,
                base_url=settings.openai_base_url,
                temperature=settings.openai_temperature,
            )
        if provider == "example":
            return ExampleClientAdapter()
        raise ValueError(
            f"Unknown generation provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
