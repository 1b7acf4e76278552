"""Resume/posting matching.

This module provides:
- KeywordExtractor: vocabulary and pattern based keyword extraction
- MatchScorer: weighted 0-100 scoring with an apply/skip recommendation
- JobMatch, Recommendation, ScoringSignals: scoring results
- Payload helpers for reports and JSON output
"""

from .engine import MatchScorer, match_keywords
from .keywords import KeywordExtractor
from .models import JobMatch, KeywordMatchResult, Recommendation, ScoringSignals
from .utils import build_match_payload, build_posting_payload, summarize_matches

__all__ = [
    "KeywordExtractor",
    "MatchScorer",
    "match_keywords",
    "JobMatch",
    "KeywordMatchResult",
    "Recommendation",
    "ScoringSignals",
    "build_match_payload",
    "build_posting_payload",
    "summarize_matches",
]
