"""Unit tests for search orchestration.

Tests the SearchOrchestrator including:
- Fan-out across sources with fixture adapters
- De-duplication, the date window and eligibility filtering
- Error and deadline isolation (one bad source doesn't stop others)
- Query building and date range resolution
- Result caching
"""

from datetime import datetime, timedelta, timezone

import pytest

from job_assistant.adapters.exceptions import AdapterConfigurationError
from job_assistant.config.models import AdvancedConfig, AppConfig, SearchConfig, SourceConfig
from job_assistant.eligibility.service import EligibilityFilter
from job_assistant.pipeline import (
    DateRange,
    SearchOrchestrator,
    SearchResult,
    SearchResultCache,
    build_orchestrator,
    deduplicate,
)

from tests.helpers import FailingAdapter, FixtureAdapter, SlowAdapter, make_posting

NOW = datetime(2025, 11, 4, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def linkedin():
    """Fixture adapter serving the LinkedIn postings."""
    return FixtureAdapter("linkedin")


@pytest.fixture
def google_jobs():
    """Fixture adapter serving the Google Jobs postings."""
    return FixtureAdapter("google_jobs")


@pytest.fixture
def orchestrator(linkedin, google_jobs):
    """Orchestrator over both fixture sources, without a cache."""
    return SearchOrchestrator(
        adapters={"LinkedIn": linkedin, "Google Jobs": google_jobs},
        eligibility_filter=EligibilityFilter(),
    )


@pytest.fixture
def fast_deadline():
    """Advanced config with a sub-second source deadline."""
    return AdvancedConfig.model_construct(source_timeout=0.3, max_workers=4)


# ============================================================================
# Search flow
# ============================================================================


class TestSearchPostings:
    """Test SearchOrchestrator.search_postings end to end."""

    def test_merges_filters_and_counts(self, orchestrator):
        """Test the whole flow over the fixture postings."""
        result = orchestrator.search_postings(date_range_days=7, now=NOW)

        assert [(p.title, p.company) for p in result.postings] == [
            ("Senior Project Manager", "Toyota"),
            ("Program Manager", "PepsiCo"),
        ]
        assert result.total_count == 2
        assert result.fetched_count == 6
        assert result.duplicates_removed == 1
        assert result.outside_window == 1
        assert result.excluded_count == 2
        assert result.filters_applied == ["full_time", "end_client", "salary_floor", "benefits"]
        assert result.queries == ["project manager"]
        assert result.from_cache is False

    def test_duplicate_keeps_first_source(self, orchestrator):
        """Test that the earlier-submitted source wins a duplicate."""
        result = orchestrator.search_postings(date_range_days=7, now=NOW)
        pepsico = [p for p in result.postings if p.company == "PepsiCo"]
        assert len(pepsico) == 1
        assert pepsico[0].source == "linkedin"

    def test_sources_called_with_search_parameters(self, orchestrator, linkedin, google_jobs):
        """Test that every source gets the query, location and window."""
        orchestrator.search_postings(date_range_days=14, now=NOW)
        assert linkedin.calls == [("project manager", "United States", 14)]
        assert google_jobs.calls == [("project manager", "United States", 14)]

    def test_date_range_on_result(self, orchestrator):
        """Test that the result reports its window."""
        result = orchestrator.search_postings(date_range_days=7, now=NOW)
        assert result.date_range == DateRange(start=NOW - timedelta(days=7), end=NOW, days=7)
        assert result.date_range.formatted == "Oct 28, 2025 - Nov 4, 2025"

    def test_postings_from_years_ago_excluded(self, tmp_path):
        """Test that a relative date in years places the posting outside the window."""
        fixture = tmp_path / "postings.yaml"
        fixture.write_text(
            "sources:\n"
            "  linkedin:\n"
            "    - external_id: '42'\n"
            "      title: Senior Project Manager\n"
            "      company: Initech\n"
            "      description: 'Full-time, $120k, benefits included'\n"
            "      url: https://www.linkedin.com/jobs/view/42\n"
            "      posted_text: Posted 2 years ago\n",
            encoding="utf-8",
        )
        adapter = FixtureAdapter("linkedin", fixture_path=fixture)
        result = SearchOrchestrator({"LinkedIn": adapter}, EligibilityFilter()).search_postings(
            date_range_days=30, now=NOW
        )
        assert result.fetched_count == 1
        assert result.outside_window == 1
        assert result.total_count == 0

    def test_wider_window_includes_more(self, linkedin):
        """Test that a narrower window drops older postings."""
        orchestrator = SearchOrchestrator({"LinkedIn": linkedin}, EligibilityFilter())
        day = orchestrator.search_postings(date_range_days=1, now=NOW)
        week = orchestrator.search_postings(date_range_days=7, now=NOW)
        assert [p.company for p in day.postings] == ["Toyota"]
        assert [p.company for p in week.postings] == ["Toyota", "PepsiCo"]

    def test_source_stats(self, orchestrator):
        """Test the per-source statistics."""
        result = orchestrator.search_postings(date_range_days=7, now=NOW)
        stats = {s.source: s for s in result.source_stats}
        assert stats["LinkedIn"].fetched == 4
        assert stats["Google Jobs"].fetched == 2
        assert not any(s.had_errors for s in result.source_stats)


class TestSourceIsolation:
    """Test that failing and slow sources do not fail the search."""

    def test_failing_source_contributes_nothing(self, linkedin):
        """Test that an adapter error is isolated."""
        orchestrator = SearchOrchestrator(
            {"LinkedIn": linkedin, "Broken": FailingAdapter()}, EligibilityFilter()
        )
        result = orchestrator.search_postings(date_range_days=7, now=NOW)

        assert result.total_count == 2
        stats = {s.source: s for s in result.source_stats}
        assert stats["Broken"].failed == 1
        assert "503" in stats["Broken"].error_message
        assert result.all_sources_failed is False

    def test_unexpected_exception_isolated(self, linkedin):
        """Test that a programming error in one adapter is isolated too."""
        orchestrator = SearchOrchestrator(
            {"LinkedIn": linkedin, "Buggy": FailingAdapter(error=KeyError("title"))}, EligibilityFilter()
        )
        result = orchestrator.search_postings(date_range_days=7, now=NOW)
        assert result.total_count == 2
        assert {s.source: s.failed for s in result.source_stats}["Buggy"] == 1

    def test_all_sources_failing_gives_empty_result(self):
        """Test the empty result when nothing could be fetched."""
        orchestrator = SearchOrchestrator(
            {"A": FailingAdapter(), "B": FailingAdapter()}, EligibilityFilter()
        )
        result = orchestrator.search_postings(date_range_days=7, now=NOW)

        assert result.is_empty
        assert result.total_count == 0
        assert result.filters_applied == []
        assert result.all_sources_failed is True

    def test_slow_source_times_out(self, linkedin, fast_deadline):
        """Test that a source missing the deadline is dropped."""
        slow = SlowAdapter()
        orchestrator = SearchOrchestrator(
            {"LinkedIn": linkedin, "Slow": slow},
            EligibilityFilter(),
            advanced_config=fast_deadline,
        )
        try:
            result = orchestrator.search_postings(date_range_days=7, now=NOW)
        finally:
            slow.release.set()

        assert result.total_count == 2
        stats = {s.source: s for s in result.source_stats}
        assert stats["Slow"].timed_out == 1
        assert stats["LinkedIn"].timed_out == 0

    def test_no_adapters(self):
        """Test that a search without sources returns an empty result."""
        result = SearchOrchestrator({}, EligibilityFilter()).search_postings(now=NOW)
        assert result.is_empty
        assert result.filters_applied == []


# ============================================================================
# Helpers
# ============================================================================


class TestDeduplicate:
    """Test deduplicate."""

    def test_same_title_and_company(self):
        """Test that one of two identical title/company pairs is kept."""
        first = make_posting(id="a", title="Program Manager", company="PepsiCo", source="linkedin")
        second = make_posting(id="b", title="Program Manager", company="PepsiCo", source="google_jobs")
        unique, dropped = deduplicate([first, second])
        assert unique == [first]
        assert dropped == 1

    def test_case_and_whitespace_insensitive(self):
        """Test that keys are normalized."""
        first = make_posting(id="a", title="Program Manager", company="PepsiCo")
        second = make_posting(id="b", title="program  manager", company="PEPSICO ")
        assert deduplicate(iter([first, second])) == ([first], 1)

    def test_different_companies_kept(self):
        """Test that the same title at two companies is two postings."""
        postings = [make_posting(id="a"), make_posting(id="b", company="Honda")]
        assert deduplicate(postings) == (postings, 0)


class TestDateRange:
    """Test DateRange boundaries."""

    def test_inclusive_bounds(self):
        """Test that both ends of the window are included."""
        window = DateRange.ending_at(NOW, 7)
        assert window.contains(NOW)
        assert window.contains(NOW - timedelta(days=7))
        assert not window.contains(NOW - timedelta(days=7, seconds=1))
        assert not window.contains(NOW + timedelta(seconds=1))


class TestQueriesAndRanges:
    """Test query building and date range resolution."""

    def test_default_query_only(self, orchestrator):
        """Test that without resume data only the target query runs."""
        assert orchestrator.build_queries() == ["project manager"]

    def test_title_added_once(self, orchestrator):
        """Test that the resume title is added unless it equals the default."""
        assert orchestrator.build_queries("Scrum Master") == ["project manager", "Scrum Master"]
        assert orchestrator.build_queries("Project Manager") == ["project manager"]

    def test_keyword_queries(self, linkedin):
        """Test keyword variants, capped and skipping terms already in the query."""
        orchestrator = SearchOrchestrator(
            {"LinkedIn": linkedin},
            EligibilityFilter(),
            search_config=SearchConfig(max_keyword_queries=2),
        )
        queries = orchestrator.build_queries("Senior Project Manager", ["agile", "manager", "scrum", "kanban"])
        assert queries == [
            "project manager",
            "Senior Project Manager",
            "project manager agile",
            "project manager scrum",
        ]

    @pytest.mark.parametrize("requested,expected", [(1, 1), (14, 14), (30, 30), (None, 7), (5, 7), (0, 7)])
    def test_resolve_date_range(self, orchestrator, requested, expected):
        """Test that unsupported windows fall back to the default."""
        assert orchestrator.resolve_date_range(requested) == expected


# ============================================================================
# Caching
# ============================================================================


class TestSearchCaching:
    """Test orchestrator use of the result cache."""

    def test_second_search_served_from_cache(self, linkedin):
        """Test that an identical search does not hit the sources again."""
        orchestrator = SearchOrchestrator(
            {"LinkedIn": linkedin}, EligibilityFilter(), cache=SearchResultCache(ttl_seconds=3600)
        )
        first = orchestrator.search_postings(date_range_days=7, now=NOW)
        second = orchestrator.search_postings(date_range_days=7, now=NOW + timedelta(minutes=5))

        assert len(linkedin.calls) == 1
        assert second.from_cache is True
        assert second.postings == first.postings

    def test_different_window_not_shared(self, linkedin):
        """Test that the date range is part of the cache key."""
        orchestrator = SearchOrchestrator(
            {"LinkedIn": linkedin}, EligibilityFilter(), cache=SearchResultCache(ttl_seconds=3600)
        )
        orchestrator.search_postings(date_range_days=7, now=NOW)
        orchestrator.search_postings(date_range_days=14, now=NOW)
        assert len(linkedin.calls) == 2

    def test_cached_postings_age_out_of_window(self, linkedin):
        """Test that a cache hit re-applies the window at the new search time."""
        orchestrator = SearchOrchestrator(
            {"LinkedIn": linkedin}, EligibilityFilter(), cache=SearchResultCache(ttl_seconds=86400)
        )
        first = orchestrator.search_postings(date_range_days=1, now=NOW)
        later = NOW + timedelta(hours=20)
        second = orchestrator.search_postings(date_range_days=1, now=later)

        assert [p.company for p in first.postings] == ["Toyota"]
        assert len(linkedin.calls) == 1
        assert second.from_cache is True
        assert second.postings == []
        assert second.total_count == 0
        assert second.outside_window == first.outside_window + 1
        assert second.date_range == DateRange.ending_at(later, 1)

    def test_cache_hit_keeps_postings_still_in_window(self, linkedin):
        """Test that only aged-out postings are dropped from a cached result."""
        orchestrator = SearchOrchestrator(
            {"LinkedIn": linkedin}, EligibilityFilter(), cache=SearchResultCache(ttl_seconds=86400)
        )
        orchestrator.search_postings(date_range_days=7, now=NOW)
        second = orchestrator.search_postings(date_range_days=7, now=NOW + timedelta(hours=12))
        assert [p.company for p in second.postings] == ["Toyota", "PepsiCo"]
        assert second.total_count == 2

    def test_location_is_part_of_key(self, linkedin):
        """Test that searches for another location are not served from cache."""
        cache = SearchResultCache(ttl_seconds=3600)
        SearchOrchestrator({"LinkedIn": linkedin}, EligibilityFilter(), cache=cache).search_postings(
            date_range_days=7, now=NOW
        )
        elsewhere = SearchOrchestrator(
            {"LinkedIn": linkedin},
            EligibilityFilter(),
            search_config=SearchConfig(location="Canada"),
            cache=cache,
        )
        result = elsewhere.search_postings(date_range_days=7, now=NOW)
        assert result.from_cache is False
        assert len(linkedin.calls) == 2

    def test_empty_results_not_cached(self):
        """Test that failed searches are retried next time."""
        cache = SearchResultCache(ttl_seconds=3600)
        orchestrator = SearchOrchestrator({"A": FailingAdapter()}, EligibilityFilter(), cache=cache)
        orchestrator.search_postings(date_range_days=7, now=NOW)
        assert len(cache) == 0


class TestBuildOrchestrator:
    """Test wiring from configuration."""

    def test_enabled_sources_only(self):
        """Test that disabled sources get no adapter."""
        config = AppConfig(
            sources=[
                SourceConfig(name="LinkedIn", type="linkedin"),
                SourceConfig(name="Google Jobs", type="google_jobs", enabled=False),
            ]
        )
        orchestrator = build_orchestrator(config, "apify_api_test")
        assert list(orchestrator.adapters) == ["LinkedIn"]
        assert isinstance(orchestrator.cache, SearchResultCache)
        assert orchestrator.search_config is config.search

    def test_cache_disabled(self):
        """Test that the cache is optional."""
        config = AppConfig(sources=[SourceConfig(name="LinkedIn", type="linkedin")], cache={"enabled": False})
        assert build_orchestrator(config, "apify_api_test").cache is None

    def test_missing_token(self):
        """Test that adapter configuration errors propagate."""
        config = AppConfig(sources=[SourceConfig(name="LinkedIn", type="linkedin")])
        with pytest.raises(AdapterConfigurationError):
            build_orchestrator(config, "")


class TestSearchResult:
    """Test SearchResult derived fields."""

    def test_total_count_defaults_to_postings(self):
        """Test that total_count is filled from the postings."""
        result = SearchResult(postings=[make_posting()], date_range=DateRange.ending_at(NOW, 7))
        assert result.total_count == 1
        assert result.is_empty is False
