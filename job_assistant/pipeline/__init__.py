"""Search orchestration across posting sources."""

from .cache import SearchResultCache
from .models import DateRange, SearchResult, SourceRunStats
from .runner import SearchOrchestrator, build_orchestrator, deduplicate

__all__ = [
    "DateRange",
    "SearchOrchestrator",
    "SearchResult",
    "SearchResultCache",
    "SourceRunStats",
    "build_orchestrator",
    "deduplicate",
]
