"""Utility functions for ids, timestamps and text cleanup."""

from .hashing import compute_posting_id, dedup_key, hash_string
from .text import clean_html, collapse_whitespace, split_words, truncate_text
from .timestamps import (
    ensure_utc,
    format_display_date,
    format_timestamp,
    parse_iso_datetime,
    parse_posted_date,
    parse_relative_date,
    utc_now,
)

__all__ = [
    # Hashing
    "compute_posting_id",
    "dedup_key",
    "hash_string",
    # Text
    "clean_html",
    "collapse_whitespace",
    "split_words",
    "truncate_text",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "parse_relative_date",
    "parse_posted_date",
    "format_timestamp",
    "format_display_date",
]
