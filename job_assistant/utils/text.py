"""Small text helpers shared by adapters, parsers and reports."""

import html
import re
from typing import List, Optional

_TAG_RE = re.compile(r"<[^>]+>")
_BLOCK_TAG_RE = re.compile(r"</?(p|div|br|li|ul|ol|h[1-6])[^>]*>", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_WORD_SPLIT_RE = re.compile(r"[\s\-_]+")


def collapse_whitespace(text: Optional[str]) -> str:
    """Strip and squeeze runs of whitespace into single spaces."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_html(raw: Optional[str]) -> str:
    """Turn an HTML fragment into plain text.

    Block-level tags become line breaks; entities are unescaped. Plain text
    passes through with only its blank lines squeezed.

    Example:
        >>> clean_html("<p>Agile &amp; Scrum</p><p>PMP</p>")
        'Agile & Scrum\\nPMP'
    """
    if not raw:
        return ""
    text = html.unescape(raw)
    text = _BLOCK_TAG_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    lines = [collapse_whitespace(line) for line in text.splitlines()]
    return "\n".join(line for line in lines if line)


def split_words(text: str) -> List[str]:
    """Split on whitespace, hyphens and underscores, dropping empties."""
    return [word for word in _WORD_SPLIT_RE.split(text) if word]


def truncate_text(text: str, max_length: int = 200, suffix: str = "...") -> str:
    """Shorten text to ``max_length`` characters, preferring a word break.

    Example:
        >>> truncate_text("Lead cross-functional delivery teams", 30)
        'Lead cross-functional...'
    """
    if not text or len(text) <= max_length:
        return text or ""
    cut = text[: max_length - len(suffix)]
    space = cut.rfind(" ")
    # Only back off to a word break when it doesn't throw away most of the text
    if space > max_length * 0.5:
        cut = cut[:space]
    return cut.rstrip() + suffix
