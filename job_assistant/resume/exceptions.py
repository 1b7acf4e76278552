"""Exceptions raised while reading an uploaded resume."""


class ResumeError(Exception):
    """Base error for resume ingestion; its message is shown to the user."""


class UnsupportedFormatError(ResumeError):
    """The document's MIME type is not one we can extract text from."""

    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__(
            f"Unsupported file type: {mime_type or 'unknown'}. Upload a PDF, DOCX or plain-text resume."
        )


class DocumentReadError(ResumeError):
    """The document has a supported type but could not be read."""

    def __init__(self, mime_type: str, detail: str):
        self.mime_type = mime_type
        self.detail = detail
        super().__init__(f"Could not read {mime_type} document: {detail}")
