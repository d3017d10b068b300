"""Profile Match AI: analyze a candidate profile against a job description with a local LLM."""

from profile_match_ai.agents.analysis_orchestrator import AnalysisOrchestrator
from profile_match_ai.errors import AnalysisError, ErrorKind
from profile_match_ai.schemas import (
    AnalysisRequest,
    AnalysisResult,
    AnalysisState,
    ExtractedText,
    InferenceOptions,
    RawDocument,
)

__all__ = [
    "AnalysisOrchestrator",
    "AnalysisError",
    "ErrorKind",
    "AnalysisRequest",
    "AnalysisResult",
    "AnalysisState",
    "ExtractedText",
    "InferenceOptions",
    "RawDocument",
]
