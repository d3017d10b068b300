"""Parse and validate the model's completion into an AnalysisResult. All-or-nothing."""

import re

from pydantic import ValidationError

from profile_match_ai.errors import MalformedResponseError
from profile_match_ai.schemas.analysis import AnalysisResult
from profile_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code block if the model added one."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw, flags=re.IGNORECASE)
        raw = re.sub(r"\s*```$", "", raw)
    return raw


def parse_completion(raw_completion: str) -> AnalysisResult:
    """
    Validate the completion as a JSON object with matches, gaps, improvedProfile, suggestions.
    Any syntax error, missing field or wrong type raises MalformedResponseError; nothing is salvaged.
    Values are passed through untouched.
    """
    try:
        return AnalysisResult.model_validate_json(_strip_code_fence(raw_completion))
    except ValidationError as e:
        logger.warning("LLM output validation failed: %s", e.errors(include_url=False))
        raise MalformedResponseError() from e
