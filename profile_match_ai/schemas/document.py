"""Uploaded document and the text extracted from it."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from profile_match_ai.errors import ErrorKind


class RawDocument(BaseModel):
    """Uploaded file as received at the upload boundary."""

    model_config = ConfigDict(frozen=True)

    payload: bytes = Field(..., description="Raw file bytes")
    filename: str = Field(..., description="Original filename, used for extension fallback")
    mime_type: Optional[str] = Field(default=None, description="Declared MIME type, if the uploader set one")

    @property
    def extension(self) -> str:
        name = (self.filename or "").strip().lower()
        if "." not in name:
            return ""
        return name.rsplit(".", 1)[-1]


class ExtractedText(BaseModel):
    """Plain text pulled from a RawDocument, or the reason it could not be."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Extracted plain text; empty when error is set")
    filename: str = Field(..., description="Originating filename")
    error: Optional[str] = Field(default=None, description="Human-readable extraction error")
    error_kind: Optional[ErrorKind] = Field(default=None, description="Typed kind of the extraction error")

    @property
    def ok(self) -> bool:
        return self.error is None
