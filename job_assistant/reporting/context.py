"""Template contexts for the search and match reports."""

from typing import Dict, Iterable, Optional, Set

from job_assistant.domain.models import ResumeData
from job_assistant.matching.models import JobMatch
from job_assistant.matching.utils import build_match_payload, build_posting_payload, summarize_matches
from job_assistant.pipeline.models import SearchResult


def build_search_context(result: SearchResult, applied_ids: Optional[Set[str]] = None) -> Dict:
    """Flatten a SearchResult for search_report.txt.j2."""
    return {
        "total_count": result.total_count,
        "days": result.date_range.days,
        "date_range": result.date_range.formatted,
        "queries": list(result.queries),
        "filters": list(result.filters_applied),
        "from_cache": result.from_cache,
        "postings": [build_posting_payload(posting, applied_ids) for posting in result.postings],
        "sources": [
            {
                "source": stats.source,
                "fetched": stats.fetched,
                "failed": stats.failed,
                "timed_out": stats.timed_out,
            }
            for stats in result.source_stats
        ],
        "counts": {
            "fetched": result.fetched_count,
            "duplicates": result.duplicates_removed,
            "outside_window": result.outside_window,
            "excluded": result.excluded_count,
        },
    }


def build_match_context(
    matches: Iterable[JobMatch],
    resume: ResumeData,
    applied_ids: Optional[Set[str]] = None,
    limit: Optional[int] = None,
) -> Dict:
    """Ranked matches plus resume highlights for match_report.txt.j2.

    The summary covers every match; ``limit`` only trims the listed entries.
    """
    matches = list(matches)
    shown = matches[:limit] if limit else matches
    return {
        "resume": {
            "job_title": resume.job_title,
            "skills": list(resume.skills),
            "job_keywords": list(resume.job_keywords),
        },
        "summary": summarize_matches(matches),
        "matches": [build_match_payload(match, applied_ids) for match in shown],
        "hidden_count": len(matches) - len(shown),
    }
