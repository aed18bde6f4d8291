from resumecraft.generation.client_base import BaseGenerationClient
from resumecraft.generation.factory import GenerationClientFactory
from resumecraft.generation.insights import InsightRequestor
from resumecraft.generation.tailor import Tailor

__all__ = ["BaseGenerationClient", "GenerationClientFactory", "InsightRequestor", "Tailor"]
