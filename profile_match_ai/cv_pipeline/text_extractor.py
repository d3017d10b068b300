"""Extract plain text from uploaded profile documents (TXT, PDF, Word). In-memory only."""

import zipfile
from abc import ABC, abstractmethod
from io import BytesIO
from typing import Dict, List, Optional

import pdfplumber
from docx import Document
from docx.table import Table
from docx.text.paragraph import Paragraph

from profile_match_ai.config import GENERIC_MIME_TYPES, MIME_TYPES, SUPPORTED_EXTENSIONS
from profile_match_ai.errors import ErrorKind, user_message
from profile_match_ai.schemas.document import ExtractedText, RawDocument
from profile_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

UNSUPPORTED_FORMAT_MESSAGE = user_message(ErrorKind.UNSUPPORTED_FORMAT)


class DocumentHandler(ABC):
    """Abstract base for one document format. Handlers may raise; extract() converts failures."""

    @abstractmethod
    def extract(self, payload: bytes) -> str:
        """Return the plain text of the payload."""
        ...


class PlainTextHandler(DocumentHandler):
    """UTF-8 text, returned verbatim. Undecodable bytes become U+FFFD."""

    def extract(self, payload: bytes) -> str:
        # utf-8-sig drops a leading BOM and nothing else
        return payload.decode("utf-8-sig", errors="replace")


class PdfHandler(DocumentHandler):
    """PDF via pdfplumber: words joined by a space within a page, pages joined by newline."""

    def extract(self, payload: bytes) -> str:
        with pdfplumber.open(BytesIO(payload)) as pdf:
            pages = []
            for page in pdf.pages:
                words = page.extract_words()
                pages.append(" ".join(w["text"] for w in words))
        return "\n".join(pages).strip()


class WordHandler(DocumentHandler):
    """
    Word documents via python-docx. Body paragraphs and table cells in document order;
    headers, footers, formatting and embedded objects are dropped.
    """

    def extract(self, payload: bytes) -> str:
        if not zipfile.is_zipfile(BytesIO(payload)):
            raise ValueError(
                "legacy binary .doc files cannot be read; save the file as .docx or paste the text instead"
            )
        doc = Document(BytesIO(payload))
        parts: List[str] = []
        for block in doc.iter_inner_content():
            parts.extend(self._block_text(block))
        return "\n\n".join(parts)

    def _block_text(self, block) -> List[str]:
        if isinstance(block, Paragraph):
            return [block.text]
        if isinstance(block, Table):
            texts = []
            for row in block.rows:
                previous = None
                for cell in row.cells:
                    # a horizontally merged cell repeats once per spanned grid column
                    if previous is not None and cell._tc is previous._tc:
                        continue
                    previous = cell
                    for paragraph in cell.paragraphs:
                        texts.append(paragraph.text)
            return texts
        return []


HANDLERS: Dict[str, DocumentHandler] = {
    "text": PlainTextHandler(),
    "pdf": PdfHandler(),
    "word": WordHandler(),
}


def supported_extensions() -> List[str]:
    """Extensions accepted at the upload boundary."""
    return list(SUPPORTED_EXTENSIONS.keys())


def resolve_format(document: RawDocument) -> Optional[str]:
    """
    Map a document to a handler key. Declared MIME type wins; when it is missing,
    generic (octet-stream) or unknown, fall back to the filename extension.
    """
    mime = (document.mime_type or "").split(";", 1)[0].strip().lower()
    if mime and mime not in GENERIC_MIME_TYPES and mime in MIME_TYPES:
        return MIME_TYPES[mime]
    return SUPPORTED_EXTENSIONS.get(document.extension)


def extract(document: RawDocument) -> ExtractedText:
    """
    Extract plain text from an uploaded document.
    Never raises: unsupported formats and extraction failures come back as error results.
    """
    filename = document.filename
    fmt = resolve_format(document)
    if fmt is None:
        logger.warning("Unsupported file type: %s (mime=%s)", filename, document.mime_type)
        return ExtractedText(
            filename=filename,
            error=UNSUPPORTED_FORMAT_MESSAGE,
            error_kind=ErrorKind.UNSUPPORTED_FORMAT,
        )

    if not document.payload:
        return ExtractedText(filename=filename)

    try:
        text = HANDLERS[fmt].extract(document.payload)
    except Exception as e:
        logger.exception("%s extraction failed for %s: %s", fmt.upper(), filename, e)
        return ExtractedText(
            filename=filename,
            error=f"Failed to process file: {str(e) or type(e).__name__}",
            error_kind=ErrorKind.EXTRACTION_FAILURE,
        )

    logger.info("Extracted %s characters from %s", len(text), filename)
    return ExtractedText(text=text, filename=filename)
