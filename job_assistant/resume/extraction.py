"""Plain-text extraction from uploaded resume documents."""

import io
import mimetypes
from pathlib import Path
from typing import Callable, Dict, Union

import docx
from pypdf import PdfReader

from job_assistant.logging import get_logger

from .exceptions import DocumentReadError, UnsupportedFormatError

logger = get_logger(__name__, component="resume")

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PLAIN_TEXT = "text/plain"

_EXTENSION_TYPES = {".pdf": PDF, ".docx": DOCX, ".txt": PLAIN_TEXT, ".md": PLAIN_TEXT}


def _pdf_text(document: bytes) -> str:
    reader = PdfReader(io.BytesIO(document))
    pages = [(page.extract_text() or "").strip() for page in reader.pages]
    return "\n".join(page for page in pages if page)


def _docx_text(document: bytes) -> str:
    parsed = docx.Document(io.BytesIO(document))
    lines = [paragraph.text for paragraph in parsed.paragraphs]
    for table in parsed.tables:
        for row in table.rows:
            lines.append(" | ".join(cell.text for cell in row.cells))
    return "\n".join(line for line in lines if line.strip())


def _plain_text(document: bytes) -> str:
    return document.decode("utf-8-sig", errors="replace")


EXTRACTORS: Dict[str, Callable[[bytes], str]] = {
    PDF: _pdf_text,
    DOCX: _docx_text,
    PLAIN_TEXT: _plain_text,
}


def extract_text(document: bytes, mime_type: str) -> str:
    """Extract the plain text of a resume.

    Args:
        document: Raw file contents
        mime_type: MIME type reported for the upload (parameters are ignored)

    Returns:
        Extracted text, stripped

    Raises:
        UnsupportedFormatError: If ``mime_type`` is not PDF, DOCX or plain text
        DocumentReadError: If the document cannot be parsed
    """
    base_type = (mime_type or "").split(";")[0].strip().lower()
    extractor = EXTRACTORS.get(base_type)
    if extractor is None:
        raise UnsupportedFormatError(mime_type)

    try:
        text = extractor(document)
    except Exception as e:
        # PDF/DOCX parsers raise a wide range of errors on corrupt input
        logger.warning(
            "Resume document could not be read",
            extra={"event": "resume.read_failed", "mime_type": base_type, "error": str(e)},
        )
        raise DocumentReadError(base_type, str(e) or type(e).__name__) from e

    text = text.strip()
    logger.info(
        "Resume text extracted",
        extra={"event": "resume.extracted", "mime_type": base_type, "characters": len(text)},
    )
    return text


def mime_type_for(path: Union[str, Path]) -> str:
    """Guess the MIME type of a resume file from its extension."""
    suffix = Path(path).suffix.lower()
    if suffix in _EXTENSION_TYPES:
        return _EXTENSION_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(str(path))
    return guessed or "application/octet-stream"


def read_resume_file(path: Union[str, Path]) -> str:
    """Read a resume from disk and extract its text."""
    path = Path(path)
    try:
        document = path.read_bytes()
    except OSError as e:
        raise DocumentReadError(mime_type_for(path), str(e)) from e
    return extract_text(document, mime_type_for(path))
