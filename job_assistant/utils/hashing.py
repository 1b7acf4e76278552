"""Deterministic identifiers for postings.

A posting id is the SHA256 of ``source:external_id``. Providers that do not
expose an id get one derived from the title, company and URL instead, so the
same listing scraped twice keeps the same id.
"""

import hashlib
from typing import Optional

from .text import collapse_whitespace


def hash_string(value: str) -> str:
    """Return the hex SHA256 digest of a string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def compute_posting_id(
    source: str,
    external_id: Optional[str] = None,
    title: str = "",
    company: str = "",
    url: str = "",
) -> str:
    """Compute the stable id of a posting.

    Args:
        source: Provider tag (linkedin, google_jobs, ...)
        external_id: Provider-side identifier, if any
        title: Posting title, used when ``external_id`` is missing
        company: Company name, used when ``external_id`` is missing
        url: Posting URL, used when ``external_id`` is missing

    Returns:
        64-character hexadecimal digest

    Example:
        >>> compute_posting_id("linkedin", "3791") == compute_posting_id("LinkedIn ", "3791")
        True
    """
    source_key = source.strip().lower()
    if external_id and external_id.strip():
        return hash_string(f"{source_key}:{external_id.strip()}")

    fingerprint = "|".join(
        collapse_whitespace(part).lower() for part in (title, company, url)
    )
    return hash_string(f"{source_key}:{fingerprint}")


def dedup_key(title: str, company: str) -> tuple:
    """Key under which two postings count as the same listing."""
    return (collapse_whitespace(title).lower(), collapse_whitespace(company).lower())
