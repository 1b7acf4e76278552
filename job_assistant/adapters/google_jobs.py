"""Google Jobs source, scraped through an Apify actor."""

from typing import Any, Dict, Optional

from job_assistant.domain.models import RawPosting

from .apify import ApifyActorAdapter


def _with_scheme(url: Optional[str]) -> Optional[str]:
    if url and not url.startswith("http"):
        return f"https://{url}"
    return url


class GoogleJobsAdapter(ApifyActorAdapter):
    """Adapter for Google Jobs via the johnvc Google-Jobs-Scraper actor.

    Google Jobs has no date filter in the actor input; the orchestrator
    applies the date window after normalization.
    """

    ADAPTER_NAME = "google_jobs"
    DEFAULT_ACTOR_ID = "johnvc/Google-Jobs-Scraper"

    def _build_input(self, query: str, location: str, date_window_days: int) -> Dict[str, Any]:
        return {
            "query": query,
            "location": location,
            "country": "None",
            "language": "None",
            "google_domain": "google.com",
            "num_results": self.max_results,
            "max_pagination": 0,
            "include_lrad": False,
            "max_delay": 1,
        }

    def _transform_item(self, item: Dict[str, Any], index: int) -> RawPosting:
        apply_options = item.get("apply_options") or []
        first_option = apply_options[0] if apply_options and isinstance(apply_options[0], dict) else {}
        extensions = item.get("detected_extensions") or {}

        url = _with_scheme(
            self._first(item, "url", "jobUrl", "link", "jobLink", "externalUrl", "share_link")
            or self._first(first_option, "link")
        )
        if not url:
            raise ValueError("Google Jobs item has no link")

        apply_url = _with_scheme(
            self._first(item, "applyUrl", "applicationUrl", "applyLink", "externalApplyUrl")
            or self._first(first_option, "link")
        )

        return RawPosting(
            external_id=self._first(item, "job_id", "jobId", "id"),
            title=self._first(item, "title", "jobTitle") or "",
            company=self._first(item, "company", "company_name", "companyName", "employer") or "",
            location=self._first(item, "location", "jobLocation", "locationName") or "",
            description=self._first(item, "description", "jobDescription", "summary", "text") or "",
            url=url,
            apply_url=apply_url,
            posted_text=self._first(item, "datePosted", "publishedAt", "postedDate")
            or self._first(extensions, "posted_at"),
        )
