"""Offline generation client.

Returns canned replies shaped like the real provider's, so the whole
pipeline can run without an API key. Also the template for new adapters:
implement BaseGenerationClient and register the provider in
GenerationClientFactory.
"""

import json
from typing import ClassVar

from resumecraft.generation.client_base import BaseGenerationClient


class ExampleClientAdapter(BaseGenerationClient):
    """Canned-reply client; picks a reply by looking at the prompt."""

    INSIGHTS_RESPONSE: ClassVar[dict[str, object]] = {
        "top_countries": ["United States", "Switzerland", "Germany", "Canada", "Australia"],
        "top_startups": ["Stripe", "Notion", "Figma", "Databricks", "Canva"],
        "top_job_profiles": [
            "Software Engineer",
            "Backend Developer",
            "Data Engineer",
            "Platform Engineer",
            "Solutions Architect",
        ],
        "key_skills": ["Python", "SQL", "Cloud", "APIs", "Testing"],
        "skill_gaps": ["Kubernetes", "System Design", "Leadership"],
        "ats_score": 72,
    }

    ATS_RESPONSE: ClassVar[dict[str, object]] = {
        "overall_score": 70,
        "keyword_match": 65,
        "format_score": 80,
        "readability_score": 75,
        "improvement_suggestions": [
            "Add a skills section near the top",
            "Quantify achievements with numbers",
            "Use standard section headings",
            "Mirror keywords from the job posting",
            "Avoid tables and multi-column layouts",
        ],
        "missing_keywords": ["CI/CD", "Agile", "REST", "Docker", "AWS"],
    }

    def generate_content(self, *, model: str, prompt: str) -> str:
        _ = model
        if '"overall_score"' in prompt:
            return json.dumps(self.ATS_RESPONSE)
        if '"top_countries"' in prompt:
            return "Here is the analysis:\n" + json.dumps(self.INSIGHTS_RESPONSE)
        return "# Tailored Resume\n\n" + prompt.split("Current Resume:", 1)[-1].strip()
