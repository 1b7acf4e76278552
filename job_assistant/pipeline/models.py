"""Data models for search execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from job_assistant.domain.models import JobPosting
from job_assistant.utils.timestamps import format_display_date


@dataclass(frozen=True)
class DateRange:
    """Closed window ``[start, end]`` of posting dates a search accepts."""

    start: datetime
    end: datetime
    days: int

    @classmethod
    def ending_at(cls, end: datetime, days: int) -> "DateRange":
        return cls(start=end - timedelta(days=days), end=end, days=days)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @property
    def formatted(self) -> str:
        """Human-readable window, e.g. ``Oct 28, 2025 - Nov 4, 2025``."""
        return f"{format_display_date(self.start)} - {format_display_date(self.end)}"


@dataclass
class SourceRunStats:
    """
    Statistics for a single source within one search.

    Attributes:
        source: Configured source name
        queries: Number of queries dispatched to the source
        fetched: Postings returned across all queries (after normalization)
        failed: Queries that ended with an adapter error
        timed_out: Queries that missed the search deadline
        error_message: Last error seen for this source, if any
    """

    source: str
    queries: int = 0
    fetched: int = 0
    failed: int = 0
    timed_out: int = 0
    error_message: Optional[str] = None

    @property
    def had_errors(self) -> bool:
        return bool(self.failed or self.timed_out)


@dataclass
class SearchResult:
    """
    Eligible postings for one search, plus how they were obtained.

    Attributes:
        postings: Postings that passed de-duplication, the date window and eligibility
        date_range: Window the search was run for
        filters_applied: Names of the eligibility checks applied (empty when nothing was fetched)
        total_count: Number of postings returned
        queries: Queries dispatched to every source
        source_stats: Per-source execution statistics
        fetched_count: Postings received from all sources before de-duplication
        duplicates_removed: Postings dropped as duplicates of an earlier title/company pair
        outside_window: Postings dropped by the date window
        excluded_count: Postings dropped by the eligibility filter
        search_id: Identifier carried in the search's log records
        from_cache: Whether this result was served from the search cache
    """

    postings: List[JobPosting]
    date_range: DateRange
    filters_applied: List[str] = field(default_factory=list)
    total_count: int = 0
    queries: List[str] = field(default_factory=list)
    source_stats: List[SourceRunStats] = field(default_factory=list)
    fetched_count: int = 0
    duplicates_removed: int = 0
    outside_window: int = 0
    excluded_count: int = 0
    search_id: str = ""
    from_cache: bool = False

    def __post_init__(self):
        if self.postings and self.total_count == 0:
            self.total_count = len(self.postings)

    @property
    def is_empty(self) -> bool:
        return not self.postings

    @property
    def all_sources_failed(self) -> bool:
        return bool(self.source_stats) and all(
            s.had_errors and s.fetched == 0 for s in self.source_stats
        )
