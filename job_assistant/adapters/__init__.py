"""Posting source adapters.

Each adapter turns a search query into RawPosting records from one
provider. Failures surface as AdapterError subclasses.
"""

from .apify import ApifyActorAdapter
from .base import BaseAdapter
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)
from .factory import get_adapter
from .google_jobs import GoogleJobsAdapter
from .linkedin import LinkedInAdapter

__all__ = [
    "AdapterConfigurationError",
    "AdapterError",
    "AdapterHTTPError",
    "AdapterResponseError",
    "AdapterTimeoutError",
    "ApifyActorAdapter",
    "BaseAdapter",
    "GoogleJobsAdapter",
    "LinkedInAdapter",
    "get_adapter",
]
