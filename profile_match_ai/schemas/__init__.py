"""Schema exports."""

from .analysis import AnalysisRequest, AnalysisResult, AnalysisState, InferenceOptions
from .document import ExtractedText, RawDocument

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "AnalysisState",
    "InferenceOptions",
    "ExtractedText",
    "RawDocument",
]
