"""Resume ingestion: document text extraction and field parsing."""

from .exceptions import DocumentReadError, ResumeError, UnsupportedFormatError
from .extraction import extract_text, mime_type_for, read_resume_file
from .parser import ResumeParser

__all__ = [
    "DocumentReadError",
    "ResumeError",
    "ResumeParser",
    "UnsupportedFormatError",
    "extract_text",
    "mime_type_for",
    "read_resume_file",
]
