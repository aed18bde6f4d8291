from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class ResumeInsights:
    """Job-market insights for a resume."""

    top_countries: list[str] = field(default_factory=list)
    top_startups: list[str] = field(default_factory=list)
    top_job_profiles: list[str] = field(default_factory=list)
    key_skills: list[str] = field(default_factory=list)
    skill_gaps: list[str] = field(default_factory=list)
    ats_score: int = 0


@dataclass(frozen=True)
class AtsInsights:
    """Applicant-tracking-system compatibility report."""

    overall_score: int
    keyword_match: int
    format_score: int
    readability_score: int
    improvement_suggestions: list[str] = field(default_factory=list)
    missing_keywords: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CombinedInsights:
    """Both insight shapes side by side; either may still be missing."""

    insights: ResumeInsights | None = None
    ats_details: AtsInsights | None = None

    def with_insights(self, insights: ResumeInsights) -> "CombinedInsights":
        return replace(self, insights=insights)

    def with_ats(self, ats_details: AtsInsights) -> "CombinedInsights":
        return replace(self, ats_details=ats_details)
