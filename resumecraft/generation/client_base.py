from abc import ABC, abstractmethod


class BaseGenerationClient(ABC):
    """Contract for provider-specific generative-text clients."""

    @abstractmethod
    def generate_content(self, *, model: str, prompt: str) -> str:
        """Send one prompt and return the generated text.

        Raises:
            GenerationNetworkError: if the provider cannot be reached.
            GenerationFailedError: on an error status or an unusable reply.
        """

    def close(self) -> None:
        """Release network resources; clients without any keep this no-op."""
