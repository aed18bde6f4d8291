from resumecraft.generation.client_base import BaseGenerationClient
from resumecraft.generation.exceptions import NoResumeSelectedError
from resumecraft.generation.models import AtsInsights, ResumeInsights
from resumecraft.generation.prompt_loader import load_prompt_template
from resumecraft.generation.validator import (
    build_ats_insights,
    build_resume_insights,
    extract_json_object,
)
from resumecraft.logging.logger import Log


class InsightRequestor:
    """Asks a generative model for structured insights about resume text."""

    def __init__(self, *, client: BaseGenerationClient, model: str) -> None:
        self._client = client
        self._model = model
        self._insights_template = load_prompt_template("insights_prompt.txt")
        self._ats_template = load_prompt_template("ats_prompt.txt")

    def insights(self, extracted_text: str) -> ResumeInsights:
        """Countries, startups, job profiles, skills, gaps and an ATS score.

        Raises:
            NoResumeSelectedError: if there is no text to analyse.
            GenerationFailedError: if the provider call fails.
            MalformedInsightsError: if the reply is not the expected JSON.
        """
        raw = self._ask(self._insights_template, extracted_text)
        result = build_resume_insights(extract_json_object(raw))
        Log.info(f"Resume insights received: ats_score={result.ats_score}")
        return result

    def ats_insights(self, extracted_text: str) -> AtsInsights:
        """Detailed ATS scores, suggestions and missing keywords."""
        raw = self._ask(self._ats_template, extracted_text)
        result = build_ats_insights(extract_json_object(raw))
        Log.info(f"ATS insights received: overall_score={result.overall_score}")
        return result

    def _ask(self, template: str, extracted_text: str) -> str:
        if not extracted_text or not extracted_text.strip():
            raise NoResumeSelectedError("No extracted resume text to analyse")
        prompt = template.format(resume_text=extracted_text)
        Log.debug(f"Insights prompt:\n{prompt}")
        raw = self._client.generate_content(model=self._model, prompt=prompt)
        Log.debug(f"AI raw response:\n{raw}")
        return raw
