"""Posting normalization: RawPosting from an adapter to a JobPosting.

Steps:
1. Compute the stable posting id from the source and provider id
2. Clean HTML out of the description and collapse whitespace elsewhere
3. Resolve the posted date (ISO or relative phrase) against the search time
4. Extract requirement phrases from the description
"""

from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import ValidationError

from job_assistant.domain.models import JobPosting, RawPosting
from job_assistant.logging import get_logger
from job_assistant.utils.hashing import compute_posting_id
from job_assistant.utils.text import clean_html, collapse_whitespace
from job_assistant.utils.timestamps import ensure_utc, parse_posted_date, utc_now

from .requirements import extract_requirements

logger = get_logger(__name__, component="normalization")


class PostingNormalizer:
    """Turns RawPosting records into immutable JobPosting models.

    All postings normalized by one instance share the same ``now``, so
    relative dates within a search resolve consistently.
    """

    def __init__(self, now: Optional[datetime] = None):
        self.now = ensure_utc(now or utc_now())

    def normalize(self, raw: RawPosting, source: str) -> JobPosting:
        """Normalize a single posting.

        Args:
            raw: Posting as returned by an adapter
            source: Provider tag recorded on the posting

        Returns:
            JobPosting; undated postings are stamped with ``now``
        """
        title = collapse_whitespace(raw.title)
        company = collapse_whitespace(raw.company)
        url = raw.url.strip()
        description = clean_html(raw.description)

        posting_id = compute_posting_id(source, raw.external_id, title, company, url)

        posted_date = parse_posted_date(raw.posted_text, self.now)
        if posted_date is None:
            logger.debug(
                "Posting has no parseable date, using search time",
                extra={
                    "event": "normalization.date_defaulted",
                    "posting_id": posting_id,
                    "posted_text": raw.posted_text,
                },
            )
            posted_date = self.now

        if not description:
            logger.debug(
                "Posting has an empty description",
                extra={"event": "normalization.missing_description", "posting_id": posting_id},
            )

        return JobPosting(
            id=posting_id,
            title=title,
            company=company,
            location=collapse_whitespace(raw.location),
            description=description,
            requirements=tuple(extract_requirements(description)),
            posted_date=posted_date,
            url=url,
            apply_url=(raw.apply_url or url).strip(),
            source=source,
        )

    def normalize_all(self, raws: Iterable[RawPosting], source: str) -> List[JobPosting]:
        """Normalize a batch, skipping (and logging) postings that fail validation."""
        postings = []
        for raw in raws:
            try:
                postings.append(self.normalize(raw, source))
            except (ValidationError, ValueError) as e:
                logger.warning(
                    "Failed to normalize posting",
                    extra={
                        "event": "normalization.failed",
                        "source": source,
                        "external_id": raw.external_id,
                        "error": str(e),
                    },
                )
        return postings
