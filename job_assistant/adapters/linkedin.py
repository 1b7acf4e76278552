"""LinkedIn source, scraped through an Apify actor."""

import re
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from job_assistant.domain.models import RawPosting

from .apify import ApifyActorAdapter

LINKEDIN_BASE_URL = "https://www.linkedin.com"
UNITED_STATES_GEO_ID = "103644278"
SECONDS_PER_DAY = 86400

_NUMERIC_ID = re.compile(r"^\d+$")
_ANY_DIGITS = re.compile(r"\d+")


def build_search_url(query: str, location: str, date_window_days: int) -> str:
    """LinkedIn job search URL restricted to full-time postings in the window.

    Example:
        >>> build_search_url("project manager", "Remote", 7)
        'https://www.linkedin.com/jobs/search/?keywords=project+manager&location=Remote&f_JT=F&f_TPR=r604800&position=1&pageNum=0'
    """
    params = {"keywords": query, "location": location}
    lowered = location.lower()
    if "united states" in lowered or lowered.strip() in ("us", "usa"):
        params["geoId"] = UNITED_STATES_GEO_ID
    params["f_JT"] = "F"
    params["f_TPR"] = f"r{date_window_days * SECONDS_PER_DAY}"
    params["position"] = "1"
    params["pageNum"] = "0"
    return f"{LINKEDIN_BASE_URL}/jobs/search/?{urlencode(params)}"


def absolute_linkedin_url(value: Optional[str], suffix: str = "") -> Optional[str]:
    """Expand bare job ids and relative paths into absolute LinkedIn URLs."""
    if not value:
        return None
    if value.startswith("http"):
        return value
    if _NUMERIC_ID.match(value):
        return f"{LINKEDIN_BASE_URL}/jobs/view/{value}{suffix}"
    return f"{LINKEDIN_BASE_URL}{value if value.startswith('/') else '/' + value}"


class LinkedInAdapter(ApifyActorAdapter):
    """Adapter for LinkedIn job search via the curious_coder actor.

    The actor takes LinkedIn search URLs rather than keywords, so the
    filters (full-time, time posted, geo) are encoded in the URL.
    """

    ADAPTER_NAME = "linkedin"
    DEFAULT_ACTOR_ID = "curious_coder/linkedin-jobs-scraper"

    def _build_input(self, query: str, location: str, date_window_days: int) -> Dict[str, Any]:
        return {
            "urls": [build_search_url(query, location, date_window_days)],
            "scrapeCompany": True,
            "count": self.max_results,
            "splitByLocation": False,
        }

    def _transform_item(self, item: Dict[str, Any], index: int) -> RawPosting:
        external_id = self._first(item, "jobId", "id", "linkedInJobId", "job_id")

        url = absolute_linkedin_url(
            self._first(item, "url", "jobUrl", "link", "jobLink", "externalUrl", "linkedInUrl")
        )
        apply_url = absolute_linkedin_url(
            self._first(item, "applyUrl", "applicationUrl", "applyLink", "externalApplyUrl"),
            suffix="/apply",
        )

        # Search-result URLs are not job links; rebuild one from the job id
        if (not url or "/jobs/search/" in url) and external_id:
            digits = _ANY_DIGITS.search(external_id)
            if digits:
                url = f"{LINKEDIN_BASE_URL}/jobs/view/{digits.group(0)}"
                apply_url = apply_url or f"{url}/apply"

        if url and not apply_url and "/jobs/view/" in url:
            apply_url = url.rstrip("/") + "/apply"

        return RawPosting(
            external_id=external_id,
            title=self._first(item, "title", "jobTitle") or "",
            company=self._first(item, "company", "companyName") or "",
            location=self._first(item, "location", "jobLocation", "locationName") or "",
            description=self._first(item, "description", "descriptionHtml", "jobDescription", "summary", "text")
            or "",
            url=url or "",
            apply_url=apply_url,
            posted_text=self._first(item, "datePosted", "publishedAt", "postedDate", "postedAt"),
        )
