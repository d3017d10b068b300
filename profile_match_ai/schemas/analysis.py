"""Analysis request sent to the inference endpoint and the validated result."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from profile_match_ai.config import MODEL_NAME, OLLAMA_URL, TEMPERATURE, TOP_P


class InferenceOptions(BaseModel):
    """Sampling parameters forwarded as the `options` object of /api/generate."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=TEMPERATURE, description="Sampling temperature")
    top_p: float = Field(default=TOP_P, description="Nucleus sampling cutoff")


class AnalysisRequest(BaseModel):
    """One analysis call. Empty texts are allowed here and rejected by the orchestrator."""

    model_config = ConfigDict(frozen=True)

    profile_text: str = Field(default="", description="Candidate profile / resume text")
    job_description: str = Field(default="", description="Target job description text")
    endpoint: str = Field(default=OLLAMA_URL, description="Base URL of the inference service")
    model: str = Field(default=MODEL_NAME, description="Model identifier on the inference service")
    options: InferenceOptions = Field(default_factory=InferenceOptions)


class AnalysisResult(BaseModel):
    """
    Structured analysis returned by the model.
    Strict: every field required, lists hold strings only, order kept as produced.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    matches: List[str] = Field(..., description="Skills/experience present in both profile and job")
    gaps: List[str] = Field(..., description="Skills/experience the job asks for that the profile lacks")
    improved_profile: str = Field(..., alias="improvedProfile", description="Rewritten profile")
    suggestions: List[str] = Field(..., description="Actionable improvement suggestions")


class AnalysisState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
