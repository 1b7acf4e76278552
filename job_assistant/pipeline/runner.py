"""Search orchestration: fan out queries, merge, date-filter and filter for eligibility."""

import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from uuid import uuid4

from job_assistant.adapters.base import BaseAdapter
from job_assistant.adapters.exceptions import AdapterError
from job_assistant.adapters.factory import get_adapter
from job_assistant.config.models import AdvancedConfig, AppConfig, SearchConfig
from job_assistant.domain.models import JobPosting
from job_assistant.eligibility.service import EligibilityFilter
from job_assistant.logging import get_logger
from job_assistant.logging.context import get_log_context, log_context
from job_assistant.normalization.service import PostingNormalizer
from job_assistant.utils.hashing import dedup_key
from job_assistant.utils.timestamps import ensure_utc, utc_now

from .cache import SearchResultCache
from .models import DateRange, SearchResult, SourceRunStats

logger = get_logger(__name__, component="pipeline")


def deduplicate(postings: Iterable[JobPosting]) -> Tuple[List[JobPosting], int]:
    """Keep the first posting per normalized (title, company) pair.

    Returns:
        Tuple of (unique postings in input order, number of duplicates dropped)
    """
    postings = list(postings)
    seen = set()
    unique = []
    for posting in postings:
        key = dedup_key(posting.title, posting.company)
        if key in seen:
            continue
        seen.add(key)
        unique.append(posting)
    return unique, len(postings) - len(unique)


class SearchOrchestrator:
    """
    Produces the population of eligible postings for one search.

    Every (source, query) pair runs concurrently on a thread pool. A source
    that raises, or that misses the overall deadline, contributes zero
    postings for that query; the search itself never fails because of a
    source.
    """

    def __init__(
        self,
        adapters: Mapping[str, BaseAdapter],
        eligibility_filter: EligibilityFilter,
        search_config: Optional[SearchConfig] = None,
        advanced_config: Optional[AdvancedConfig] = None,
        cache: Optional[SearchResultCache] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            adapters: Source adapters keyed by configured source name
            eligibility_filter: Filter applied to date-filtered postings
            search_config: Queries, location and allowed date ranges
            advanced_config: Worker count and the overall source deadline
            cache: Optional result cache keyed by (queries, date range)
        """
        self.adapters = dict(adapters)
        self.eligibility_filter = eligibility_filter
        self.search_config = search_config or SearchConfig()
        self.advanced_config = advanced_config or AdvancedConfig()
        self.cache = cache

    def resolve_date_range(self, days: Optional[int]) -> int:
        """Return ``days`` if it is an allowed window, else the configured default."""
        allowed = self.search_config.allowed_date_ranges
        default = self.search_config.default_date_range_days
        if days is None:
            return default
        if days not in allowed:
            logger.warning(
                f"Unsupported date range {days}, using {default} days",
                extra={"event": "search.date_range_defaulted", "requested": days, "allowed": allowed},
            )
            return default
        return days

    def build_queries(
        self, resume_title: Optional[str] = None, resume_keywords: Optional[Sequence[str]] = None
    ) -> List[str]:
        """Target-role query first, then the resume title, then keyword variants.

        Queries are distinct case-insensitively.
        """
        base = self.search_config.default_query.strip()
        queries = [base]
        seen = {base.lower()}

        if resume_title and resume_title.strip() and resume_title.strip().lower() not in seen:
            queries.append(resume_title.strip())
            seen.add(resume_title.strip().lower())

        added = 0
        for keyword in resume_keywords or ():
            if added >= self.search_config.max_keyword_queries:
                break
            keyword = keyword.strip()
            if not keyword or keyword.lower() in base.lower():
                continue
            query = f"{base} {keyword}"
            if query.lower() in seen:
                continue
            queries.append(query)
            seen.add(query.lower())
            added += 1

        return queries

    def search_postings(
        self,
        resume_title: Optional[str] = None,
        resume_keywords: Optional[Sequence[str]] = None,
        date_range_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> SearchResult:
        """
        Run one search.

        Steps:
        1. Build queries and resolve the date window
        2. Fan every query out to every source, within one overall deadline
        3. Merge in submission order and drop duplicate title/company pairs
        4. Drop postings outside ``[now - days, now]``
        5. Apply the eligibility filter

        Returns:
            SearchResult; empty (with an empty filter list) when no source returned anything
        """
        now = ensure_utc(now or utc_now())
        days = self.resolve_date_range(date_range_days)
        date_range = DateRange.ending_at(now, days)
        queries = self.build_queries(resume_title, resume_keywords)
        search_id = uuid4().hex[:12]

        with log_context(search_id=search_id):
            logger.info(
                "Search started",
                extra={
                    "event": "search.started",
                    "queries": queries,
                    "date_range_days": days,
                    "sources": list(self.adapters),
                },
            )

            if self.cache is not None:
                cached = self.cache.get(queries, days, now, self.search_config.location)
                if cached is not None:
                    result = self._refresh_window(cached, date_range)
                    logger.info(
                        "Serving search from cache",
                        extra={
                            "event": "search.cache_hit",
                            "total_count": result.total_count,
                            "aged_out": cached.total_count - result.total_count,
                        },
                    )
                    return result

            batches, source_stats = self._fan_out(queries, days, now)
            fetched = [posting for batch in batches for posting in batch]
            merged, duplicates = deduplicate(fetched)
            in_window = [p for p in merged if date_range.contains(p.posted_date)]

            if merged:
                eligible = self.eligibility_filter.filter_jobs(in_window)
                filters_applied = self.eligibility_filter.filter_names
            else:
                eligible = []
                filters_applied = []

            result = SearchResult(
                postings=eligible,
                date_range=date_range,
                filters_applied=filters_applied,
                total_count=len(eligible),
                queries=queries,
                source_stats=source_stats,
                fetched_count=len(fetched),
                duplicates_removed=duplicates,
                outside_window=len(merged) - len(in_window),
                excluded_count=len(in_window) - len(eligible),
                search_id=search_id,
            )

            if result.is_empty:
                logger.warning(
                    "Search found no eligible postings",
                    extra={
                        "event": "search.empty",
                        "fetched_count": result.fetched_count,
                        "all_sources_failed": result.all_sources_failed,
                    },
                )

            logger.info(
                "Search completed",
                extra={
                    "event": "search.completed",
                    "fetched_count": result.fetched_count,
                    "duplicates_removed": result.duplicates_removed,
                    "outside_window": result.outside_window,
                    "excluded_count": result.excluded_count,
                    "total_count": result.total_count,
                    "date_range": date_range.formatted,
                },
            )

            # Empty results are not cached so the next search retries the sources
            if self.cache is not None and not result.is_empty:
                self.cache.put(queries, days, result, now, self.search_config.location)

            return result

    @staticmethod
    def _refresh_window(cached: SearchResult, date_range: DateRange) -> SearchResult:
        """Re-apply the current date window to a cached result.

        Postings that have aged out since the result was stored are dropped
        and counted as outside the window.
        """
        postings = [p for p in cached.postings if date_range.contains(p.posted_date)]
        aged_out = len(cached.postings) - len(postings)
        return replace(
            cached,
            postings=postings,
            date_range=date_range,
            total_count=len(postings),
            outside_window=cached.outside_window + aged_out,
            from_cache=True,
        )

    def _fan_out(
        self, queries: List[str], days: int, now: datetime
    ) -> Tuple[List[List[JobPosting]], List[SourceRunStats]]:
        """Run every (source, query) pair and collect results in submission order."""
        stats: Dict[str, SourceRunStats] = {name: SourceRunStats(source=name) for name in self.adapters}
        tasks = [(name, adapter, query) for name, adapter in self.adapters.items() for query in queries]
        if not tasks:
            return [], list(stats.values())

        context = get_log_context()
        batches: List[List[JobPosting]] = []
        executor = ThreadPoolExecutor(
            max_workers=min(self.advanced_config.max_workers, len(tasks)),
            thread_name_prefix="source",
        )
        try:
            futures = [
                executor.submit(self._run_query, name, adapter, query, days, now, context)
                for name, adapter, query in tasks
            ]
            deadline = time.monotonic() + self.advanced_config.source_timeout

            for (name, _, query), future in zip(tasks, futures):
                source_stats = stats[name]
                source_stats.queries += 1
                remaining = max(0.0, deadline - time.monotonic())
                try:
                    postings = future.result(timeout=remaining)
                except FutureTimeoutError:
                    future.cancel()
                    source_stats.timed_out += 1
                    source_stats.error_message = f"timed out after {self.advanced_config.source_timeout}s"
                    logger.warning(
                        f"Source {name} timed out",
                        extra={
                            "event": "source.timed_out",
                            "source": name,
                            "query": query,
                            "timeout_seconds": self.advanced_config.source_timeout,
                        },
                    )
                    continue
                except AdapterError as e:
                    source_stats.failed += 1
                    source_stats.error_message = str(e)
                    logger.error(
                        f"Source {name} failed: {e}",
                        extra={
                            "event": "source.failed",
                            "source": name,
                            "query": query,
                            "error_type": type(e).__name__,
                            "error": str(e),
                        },
                    )
                    continue
                except Exception as e:
                    # Unexpected adapter bug; the search carries on without this source
                    source_stats.failed += 1
                    source_stats.error_message = str(e)
                    logger.error(
                        f"Unexpected error from source {name}: {e}",
                        extra={
                            "event": "source.failed",
                            "source": name,
                            "query": query,
                            "error_type": type(e).__name__,
                            "error": str(e),
                        },
                        exc_info=True,
                    )
                    continue

                source_stats.fetched += len(postings)
                batches.append(postings)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return batches, list(stats.values())

    def _run_query(
        self,
        name: str,
        adapter: BaseAdapter,
        query: str,
        days: int,
        now: datetime,
        context: Dict[str, object],
    ) -> List[JobPosting]:
        # Worker threads start with an empty log context
        with log_context(**{**context, "source": name, "query": query}):
            started = time.monotonic()
            raw = adapter.search(query, self.search_config.location, days)
            postings = PostingNormalizer(now).normalize_all(raw, adapter.ADAPTER_NAME)
            logger.debug(
                f"Fetched {len(postings)} postings from {name}",
                extra={
                    "event": "source.completed",
                    "count": len(postings),
                    "duration_ms": int((time.monotonic() - started) * 1000),
                },
            )
            return postings


def build_orchestrator(app_config: AppConfig, api_token: str) -> SearchOrchestrator:
    """Wire adapters, the eligibility filter and the cache from configuration.

    Raises:
        AdapterConfigurationError: If a source cannot be instantiated
    """
    adapters = {
        source.name: get_adapter(source, api_token, app_config.advanced)
        for source in app_config.get_enabled_sources()
    }
    cache = None
    if app_config.cache.enabled:
        cache = SearchResultCache(ttl_seconds=app_config.cache.ttl_seconds)
    return SearchOrchestrator(
        adapters=adapters,
        eligibility_filter=EligibilityFilter(app_config.eligibility),
        search_config=app_config.search,
        advanced_config=app_config.advanced,
        cache=cache,
    )
