"""Normalization of scraped postings into JobPosting models."""

from .requirements import extract_requirements
from .service import PostingNormalizer

__all__ = ["PostingNormalizer", "extract_requirements"]
