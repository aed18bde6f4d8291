"""Turns a model's free-form reply into validated insight dataclasses."""

import json
import math
from typing import Any

from resumecraft.generation.exceptions import MalformedInsightsError
from resumecraft.generation.models import AtsInsights, ResumeInsights

_INSIGHT_LIST_FIELDS = (
    "top_countries",
    "top_startups",
    "top_job_profiles",
    "key_skills",
    "skill_gaps",
)
_ATS_SCORE_FIELDS = ("overall_score", "keyword_match", "format_score", "readability_score")
_ATS_LIST_FIELDS = ("improvement_suggestions", "missing_keywords")


def extract_json_object(raw: str) -> dict[str, Any]:
    """Parse the text between the first '{' and the last '}' of a reply.

    Models often wrap the JSON in prose or code fences; everything outside
    the outermost braces is ignored.

    Raises:
        MalformedInsightsError: if no object is found or it does not parse.
    """
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end < start:
        raise MalformedInsightsError("Reply contains no JSON object")
    try:
        parsed = json.loads(raw[start : end + 1])
    except json.JSONDecodeError as exc:
        raise MalformedInsightsError(f"Invalid JSON in reply: {exc}") from exc
    if not isinstance(parsed, dict):
        raise MalformedInsightsError("JSON reply must be an object")
    return parsed


def build_resume_insights(data: dict[str, Any]) -> ResumeInsights:
    _require_fields(data, (*_INSIGHT_LIST_FIELDS, "ats_score"))
    lists = {name: _string_list(data[name], name) for name in _INSIGHT_LIST_FIELDS}
    return ResumeInsights(**lists, ats_score=_score(data["ats_score"], "ats_score"))


def build_ats_insights(data: dict[str, Any]) -> AtsInsights:
    _require_fields(data, (*_ATS_SCORE_FIELDS, *_ATS_LIST_FIELDS))
    scores = {name: _score(data[name], name) for name in _ATS_SCORE_FIELDS}
    lists = {name: _string_list(data[name], name) for name in _ATS_LIST_FIELDS}
    return AtsInsights(**scores, **lists)


def _require_fields(data: dict[str, Any], fields: tuple[str, ...]) -> None:
    missing = [name for name in fields if name not in data]
    if missing:
        raise MalformedInsightsError(f"Missing required fields: {', '.join(missing)}")


def _string_list(raw: Any, name: str) -> list[str]:
    if not isinstance(raw, list):
        raise MalformedInsightsError(f"'{name}' must be a list")
    items: list[str] = []
    for index, item in enumerate(raw):
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            raise MalformedInsightsError(f"'{name}[{index}]' must be a string")
        items.append(str(item).strip())
    return items


def _score(raw: Any, name: str) -> int:
    if isinstance(raw, str) and raw.strip().isdecimal():
        try:
            raw = int(raw.strip())
        except ValueError as exc:
            raise MalformedInsightsError(f"'{name}' must be a number, got {raw!r}") from exc
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedInsightsError(f"'{name}' must be a number")
    if isinstance(raw, float) and not math.isfinite(raw):
        raise MalformedInsightsError(f"'{name}' must be a finite number, got {raw}")
    try:
        score = int(round(raw))
    except (ValueError, OverflowError) as exc:
        raise MalformedInsightsError(f"'{name}' is not a usable score: {raw}") from exc
    if not 1 <= score <= 100:
        raise MalformedInsightsError(f"'{name}' must be between 1 and 100, got {raw}")
    return score
