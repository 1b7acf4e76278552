"""Base adapter class with shared functionality for all posting sources.

This module provides the abstract base class that every source adapter
implements, along with shared utilities for HTTP requests, field lookups
and result truncation.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

import requests

from job_assistant.domain.models import RawPosting
from job_assistant.logging import get_logger

from .exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")


class BaseAdapter(ABC):
    """Base class for all posting source adapters.

    Provides shared HTTP request handling and error mapping. Subclasses
    implement search(), which turns one query into RawPosting records.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
        max_jobs: Maximum postings to return per search call (0 = unlimited)
    """

    ADAPTER_NAME = "base"

    def __init__(
        self, timeout: int = 30, user_agent: str = "JobMatchAssistant/1.0", max_jobs: int = 1000
    ) -> None:
        """Initialize adapter with configuration.

        Args:
            timeout: HTTP request timeout in seconds (default 30, range 5-300)
            user_agent: User-Agent header for requests
            max_jobs: Maximum postings per search call (default 1000, 0 = unlimited)

        Raises:
            AdapterConfigurationError: If timeout is outside valid range or user_agent is empty
        """
        if not 5 <= timeout <= 300:
            raise AdapterConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.user_agent = user_agent.strip()
        self.max_jobs = max_jobs

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @abstractmethod
    def search(self, query: str, location: str, date_window_days: int) -> List[RawPosting]:
        """Fetch postings matching one query.

        Implementations should:
        1. Make the provider request(s) for ``query`` within the last ``date_window_days``
        2. Map provider items onto RawPosting
        3. Drop (and log) items that fail validation rather than failing the call

        Args:
            query: Free-text search query, e.g. "project manager"
            location: Location filter passed to the provider
            date_window_days: Only postings from the last N days are requested

        Returns:
            List of RawPosting models, possibly empty

        Raises:
            AdapterError: When the source is unavailable. Its subclasses indicate:
            - AdapterHTTPError: HTTP 4xx/5xx errors or connection failures
            - AdapterResponseError: Response parsing/validation failed
            - AdapterTimeoutError: Request timed out
        """
        pass

    def close(self) -> None:
        self._session.close()

    def _make_request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Make HTTP request with error handling.

        Args:
            url: URL to request
            method: HTTP method (default "GET")
            headers: Additional headers to include (merged with defaults)
            params: Query parameters
            json_data: JSON body for POST requests
            timeout: Overrides the adapter timeout for long-polling calls

        Returns:
            Parsed JSON response (dict or list)

        Raises:
            AdapterHTTPError: On 4xx or 5xx HTTP status, or connection failure
            AdapterTimeoutError: On request timeout
            AdapterResponseError: On invalid JSON
        """
        request_headers = self._session.headers.copy()
        if headers:
            request_headers.update(headers)
        request_timeout = timeout or self.timeout

        try:
            logger.debug(
                f"HTTP {method} request to {url}",
                extra={
                    "event": "adapter.fetch.request",
                    "method": method,
                    "url": url,
                    "timeout": request_timeout,
                },
            )

            response = self._session.request(
                method=method,
                url=url,
                headers=request_headers,
                params=params,
                json=json_data,
                timeout=request_timeout,
            )

            if response.status_code >= 400:
                is_transient = response.status_code >= 500
                event_name = "adapter.fetch.transient_error" if is_transient else "adapter.fetch.error"
                log_level = logging.WARNING if is_transient else logging.ERROR

                logger.log(
                    log_level,
                    f"HTTP {response.status_code} error from {url}",
                    extra={
                        "event": event_name,
                        "status_code": response.status_code,
                        "url": url,
                    },
                )

                raise AdapterHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=url,
                )

            try:
                data = response.json()
            except (ValueError, requests.exceptions.JSONDecodeError) as e:
                logger.error(
                    f"Failed to parse JSON response from {url}",
                    extra={
                        "event": "adapter.fetch.error",
                        "error_type": "JSONDecodeError",
                        "url": url,
                    },
                )
                raise AdapterResponseError(
                    f"Failed to parse JSON response from {url}: {e}"
                ) from e

            logger.debug(
                "HTTP request succeeded",
                extra={
                    "event": "adapter.fetch.succeeded",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            return data

        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {request_timeout} seconds",
                extra={
                    "event": "adapter.fetch.transient_error",
                    "error_type": "Timeout",
                    "url": url,
                    "timeout": request_timeout,
                },
            )
            raise AdapterTimeoutError(
                f"Request to {url} timed out after {request_timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "adapter.fetch.error",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise AdapterHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e

    @staticmethod
    def _first(item: Mapping[str, Any], *keys: str) -> Optional[str]:
        """Return the first non-empty value among ``keys``, as a string.

        Providers rename fields between actor versions, so lookups go
        through a list of known aliases.
        """
        for key in keys:
            value = item.get(key)
            if value is None or value == "":
                continue
            return str(value)
        return None

    def _truncate(self, items: List[Any], query: str) -> List[Any]:
        """Truncate a provider result list to max_jobs if configured."""
        if self.max_jobs > 0 and len(items) > self.max_jobs:
            logger.warning(
                "Truncating results to max_jobs limit",
                extra={
                    "event": "adapter.truncated",
                    "adapter": self.ADAPTER_NAME,
                    "query": query,
                    "total": len(items),
                    "max": self.max_jobs,
                },
            )
            return items[: self.max_jobs]

        return items
