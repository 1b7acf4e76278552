"""Factory function for instantiating posting source adapters."""

from job_assistant.config.models import AdvancedConfig, SourceConfig
from job_assistant.logging import get_logger

from .apify import ApifyActorAdapter
from .exceptions import AdapterConfigurationError
from .google_jobs import GoogleJobsAdapter
from .linkedin import LinkedInAdapter

logger = get_logger(__name__, component="adapter")

ADAPTER_MAP = {
    "linkedin": LinkedInAdapter,
    "google_jobs": GoogleJobsAdapter,
}


def get_adapter(
    source_config: SourceConfig, api_token: str, advanced_config: AdvancedConfig
) -> ApifyActorAdapter:
    """Instantiate the adapter for a configured source.

    Args:
        source_config: Source with its provider type and actor id
        api_token: Apify API token
        advanced_config: Timeouts, user agent and result limits

    Returns:
        Adapter ready to search

    Raises:
        AdapterConfigurationError: If the source type is unknown or the adapter rejects its settings

    Example:
        >>> source = SourceConfig(name="LinkedIn", type="linkedin")
        >>> adapter = get_adapter(source, "apify_api_xxx", AdvancedConfig())
        >>> postings = adapter.search("project manager", "United States", 7)
    """
    source_type = str(source_config.type).lower()
    adapter_class = ADAPTER_MAP.get(source_type)

    if not adapter_class:
        supported_types = ", ".join(sorted(ADAPTER_MAP))
        raise AdapterConfigurationError(
            f"Unknown source type: {source_config.type}. Supported types: {supported_types}"
        )

    logger.debug(
        "Creating adapter instance",
        extra={
            "event": "adapter.created",
            "source_type": source_type,
            "source": source_config.name,
            "adapter_class": adapter_class.__name__,
        },
    )

    try:
        return adapter_class(
            api_token=api_token,
            actor_id=source_config.actor_id or "",
            timeout=advanced_config.http_request_timeout,
            user_agent=advanced_config.user_agent,
            max_jobs=advanced_config.max_jobs_per_source,
            wait_seconds=advanced_config.actor_wait_seconds,
            max_results=advanced_config.max_results_per_query,
        )
    except AdapterConfigurationError:
        raise
    except (TypeError, ValueError) as e:
        raise AdapterConfigurationError(f"Failed to create {source_type} adapter: {e}") from e
