"""Profile pipeline: document text extraction and prompt construction."""

from profile_match_ai.cv_pipeline.prompt_builder import RESULT_FIELDS, build_prompt
from profile_match_ai.cv_pipeline.text_extractor import extract, supported_extensions

__all__ = ["extract", "supported_extensions", "build_prompt", "RESULT_FIELDS"]
