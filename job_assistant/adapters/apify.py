"""Shared plumbing for sources backed by Apify actors."""

from abc import abstractmethod
from typing import Any, Dict, List

from pydantic import ValidationError

from job_assistant.domain.models import RawPosting
from job_assistant.logging import get_logger

from .base import BaseAdapter
from .exceptions import AdapterConfigurationError, AdapterResponseError

logger = get_logger(__name__, component="adapter")

RUNNING_STATUSES = frozenset({"READY", "RUNNING"})
FAILED_STATUSES = frozenset({"FAILED", "TIMING-OUT", "TIMED-OUT", "ABORTING", "ABORTED"})


class ApifyActorAdapter(BaseAdapter):
    """Runs one Apify actor per search and maps its dataset items.

    API Details:
        Start run: POST {API_BASE_URL}/acts/{actor}/runs?waitForFinish=N
        Run status: GET {API_BASE_URL}/actor-runs/{run_id}
        Items: GET {API_BASE_URL}/datasets/{dataset_id}/items
        Authentication: Bearer token

    Each search makes a single attempt. A run that is still going at the
    wait deadline, or that ends FAILED, still has its dataset read, since
    actors often push partial results before stopping.
    """

    API_BASE_URL = "https://api.apify.com/v2"
    DEFAULT_ACTOR_ID = ""

    def __init__(
        self,
        api_token: str,
        actor_id: str = "",
        timeout: int = 30,
        user_agent: str = "JobMatchAssistant/1.0",
        max_jobs: int = 1000,
        wait_seconds: int = 45,
        max_results: int = 50,
    ) -> None:
        super().__init__(timeout=timeout, user_agent=user_agent, max_jobs=max_jobs)
        if not api_token or not api_token.strip():
            raise AdapterConfigurationError(
                f"{self.ADAPTER_NAME} source requires an Apify API token (APIFY_API_TOKEN)"
            )
        self.actor_id = actor_id or self.DEFAULT_ACTOR_ID
        if not self.actor_id:
            raise AdapterConfigurationError(f"{self.ADAPTER_NAME} source requires an actor_id")
        self.wait_seconds = wait_seconds
        self.max_results = max_results
        self._session.headers.update({"Authorization": f"Bearer {api_token.strip()}"})

    def search(self, query: str, location: str, date_window_days: int) -> List[RawPosting]:
        """Run the actor for one query and return the postings it scraped.

        Raises:
            AdapterError: If the run cannot be started or its items cannot be read
        """
        logger.info(
            f"Searching {self.ADAPTER_NAME}",
            extra={
                "event": "adapter.search.started",
                "adapter": self.ADAPTER_NAME,
                "actor_id": self.actor_id,
                "query": query,
                "location": location,
                "date_window_days": date_window_days,
            },
        )

        run_input = self._build_input(query, location, date_window_days)
        items = self._truncate(self.run_actor(run_input), query)

        postings = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                continue
            try:
                postings.append(self._transform_item(item, index))
            except (ValidationError, KeyError, ValueError, TypeError) as e:
                logger.warning(
                    f"Dropping malformed {self.ADAPTER_NAME} item",
                    extra={
                        "event": "adapter.item.dropped",
                        "adapter": self.ADAPTER_NAME,
                        "query": query,
                        "index": index,
                        "error": str(e),
                    },
                )

        logger.info(
            f"Fetched postings from {self.ADAPTER_NAME}",
            extra={
                "event": "adapter.search.completed",
                "adapter": self.ADAPTER_NAME,
                "query": query,
                "items": len(items),
                "count": len(postings),
            },
        )
        return postings

    def run_actor(self, run_input: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Start the actor, wait up to ``wait_seconds`` and return its dataset items."""
        actor_path = self.actor_id.replace("/", "~")
        run = self._unwrap(
            self._make_request(
                f"{self.API_BASE_URL}/acts/{actor_path}/runs",
                method="POST",
                params={"waitForFinish": self.wait_seconds},
                json_data=run_input,
                # Apify holds the connection open for up to waitForFinish seconds
                timeout=self.wait_seconds + self.timeout,
            )
        )

        run_id = run.get("id")
        status = run.get("status")

        if status in RUNNING_STATUSES and run_id:
            run = {**run, **self._unwrap(self._make_request(f"{self.API_BASE_URL}/actor-runs/{run_id}"))}
            status = run.get("status")
            logger.warning(
                "Actor run still in progress at wait deadline, reading partial results",
                extra={"event": "adapter.run.partial", "adapter": self.ADAPTER_NAME, "run_id": run_id, "status": status},
            )
        elif status in FAILED_STATUSES:
            logger.warning(
                "Actor run did not succeed, reading partial results",
                extra={
                    "event": "adapter.run.failed",
                    "adapter": self.ADAPTER_NAME,
                    "run_id": run_id,
                    "status": status,
                    "status_message": run.get("statusMessage"),
                },
            )

        dataset_id = run.get("defaultDatasetId")
        if not dataset_id:
            logger.warning(
                "Actor run has no dataset",
                extra={"event": "adapter.run.no_dataset", "adapter": self.ADAPTER_NAME, "run_id": run_id},
            )
            return []

        items = self._make_request(
            f"{self.API_BASE_URL}/datasets/{dataset_id}/items",
            params={"clean": "true", "format": "json", "limit": self.max_results},
        )
        if not isinstance(items, list):
            raise AdapterResponseError(
                f"Expected dataset items to be an array, got {type(items).__name__}"
            )
        return items

    @staticmethod
    def _unwrap(response: Any) -> Dict[str, Any]:
        """Apify wraps run objects in ``{"data": {...}}``."""
        if not isinstance(response, dict):
            raise AdapterResponseError(
                f"Expected JSON object response, got {type(response).__name__}"
            )
        data = response.get("data", response)
        if not isinstance(data, dict):
            raise AdapterResponseError(f"Expected 'data' to be an object, got {type(data).__name__}")
        return data

    @abstractmethod
    def _build_input(self, query: str, location: str, date_window_days: int) -> Dict[str, Any]:
        """Actor input for one search."""

    @abstractmethod
    def _transform_item(self, item: Dict[str, Any], index: int) -> RawPosting:
        """Map one dataset item onto RawPosting; raise ValueError/ValidationError to drop it."""
