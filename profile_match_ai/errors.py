"""Typed failures of the analysis pipeline. Every stage fails with one of these."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    UNSUPPORTED_FORMAT = "unsupported_format"
    EXTRACTION_FAILURE = "extraction_failure"
    MISSING_INPUT = "missing_input"
    SERVICE_UNAVAILABLE = "service_unavailable"
    MALFORMED_RESPONSE = "malformed_response"
    ALREADY_RUNNING = "already_running"


# User-facing text per error kind (one distinct message each)
USER_MESSAGES: dict = {
    ErrorKind.UNSUPPORTED_FORMAT: "Unsupported file type. Please upload a PDF, Word document, or text file.",
    ErrorKind.EXTRACTION_FAILURE: "Could not read the uploaded file. Try re-uploading it or paste your profile as text.",
    ErrorKind.MISSING_INPUT: "Please provide both your profile and the job description.",
    ErrorKind.SERVICE_UNAVAILABLE: "Failed to connect to Ollama. Please check if Ollama is running.",
    ErrorKind.MALFORMED_RESPONSE: "Failed to parse AI response. Please try again.",
    ErrorKind.ALREADY_RUNNING: "An analysis is already running. Please wait for it to finish.",
}


def user_message(kind: ErrorKind) -> str:
    """Return the user-facing message for an error kind."""
    return USER_MESSAGES[kind]


class AnalysisError(Exception):
    """Base class for pipeline failures. Terminal for the run that raised it."""

    kind: ErrorKind
    title: str = "Analysis Failed"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or user_message(self.kind)
        super().__init__(self.message)


class UnsupportedFormatError(AnalysisError):
    kind = ErrorKind.UNSUPPORTED_FORMAT
    title = "Unsupported File"


class ExtractionFailureError(AnalysisError):
    kind = ErrorKind.EXTRACTION_FAILURE
    title = "File Processing Failed"


class MissingInputError(AnalysisError):
    kind = ErrorKind.MISSING_INPUT
    title = "Missing Information"


class ServiceUnavailableError(AnalysisError):
    """Endpoint unreachable or answered with a non-success status."""

    kind = ErrorKind.SERVICE_UNAVAILABLE
    title = "Inference Service Unavailable"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class MalformedResponseError(AnalysisError):
    kind = ErrorKind.MALFORMED_RESPONSE


class AnalysisInProgressError(AnalysisError):
    kind = ErrorKind.ALREADY_RUNNING
    title = "Analysis In Progress"


ERRORS_BY_KIND: dict = {
    cls.kind: cls
    for cls in (
        UnsupportedFormatError,
        ExtractionFailureError,
        MissingInputError,
        ServiceUnavailableError,
        MalformedResponseError,
        AnalysisInProgressError,
    )
}
