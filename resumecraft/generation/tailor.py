from pathlib import Path

from resumecraft.generation.client_base import BaseGenerationClient
from resumecraft.generation.exceptions import NoJobDescriptionError, NoResumeSelectedError
from resumecraft.generation.prompt_loader import load_prompt_template
from resumecraft.logging.logger import Log


class Tailor:
    """Rewrites a resume to fit a job description through a generative model."""

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        model: str,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._prompt_template = load_prompt_template("tailor_prompt.txt", prompt_template_path)

    def tailor(self, resume_text: str, job_description: str) -> str:
        """Return resume content tailored to ``job_description``.

        Both inputs are validated before any network call.

        Raises:
            NoResumeSelectedError: if ``resume_text`` is empty.
            NoJobDescriptionError: if ``job_description`` is blank.
            GenerationFailedError: if the provider call fails.
        """
        if not resume_text or not resume_text.strip():
            raise NoResumeSelectedError("Please select a resume first")
        if not job_description or not job_description.strip():
            raise NoJobDescriptionError("Please enter a job description")

        prompt = self._prompt_template.format(
            resume_text=resume_text,
            job_description=job_description,
        )
        Log.debug(f"Tailoring prompt:\n{prompt}")
        content = self._client.generate_content(model=self._model, prompt=prompt)
        Log.info(f"Generated tailored resume: {len(content)} chars")
        return content
