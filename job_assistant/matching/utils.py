"""Helpers for handing match results to reports and JSON output."""

from typing import Dict, Iterable, List, Optional, Set

from job_assistant.domain.models import JobPosting
from job_assistant.utils.text import truncate_text
from job_assistant.utils.timestamps import format_display_date, format_timestamp

from .models import JobMatch


def build_posting_payload(
    posting: JobPosting, applied_ids: Optional[Set[str]] = None, description_length: int = 280
) -> Dict:
    """Flatten a posting into template/JSON friendly primitives."""
    return {
        "id": posting.id,
        "title": posting.title,
        "company": posting.company,
        "location": posting.location or "Not specified",
        "source": posting.source,
        "url": posting.url,
        "apply_url": posting.apply_url,
        "posted_date": format_timestamp(posting.posted_date),
        "posted_display": format_display_date(posting.posted_date),
        "requirements": list(posting.requirements),
        "summary": truncate_text(" ".join(posting.description.split()), description_length),
        "applied": bool(applied_ids and posting.id in applied_ids),
    }


def build_match_payload(match: JobMatch, applied_ids: Optional[Set[str]] = None) -> Dict:
    """Posting payload plus the score, recommendation and explanation.

    Example:
        >>> payload = build_match_payload(match)
        >>> payload["recommendation"] in ("apply", "skip")
        True
    """
    payload = build_posting_payload(match.job, applied_ids)
    payload.update({
        "score": match.score,
        "recommendation": match.recommendation.value,
        "reasons": list(match.reasons),
        "matched_skills": list(match.matched_skills),
        "missing_skills": list(match.missing_skills),
        "signals": {
            "keyword_ratio": round(match.signals.keyword_ratio, 3),
            "role_match": match.signals.role_match,
            "experience_match": match.signals.experience_match,
            "education_match": match.signals.education_match,
            "target_role_bonus": match.signals.target_role_bonus,
        },
    })
    return payload


def summarize_matches(matches: Iterable[JobMatch]) -> Dict:
    """Counts and score statistics for a ranked match list."""
    matches: List[JobMatch] = list(matches)
    scores = [match.score for match in matches]
    return {
        "total": len(matches),
        "apply": sum(1 for match in matches if match.should_apply),
        "skip": sum(1 for match in matches if not match.should_apply),
        "top_score": max(scores) if scores else None,
        "average_score": round(sum(scores) / len(scores)) if scores else None,
    }
