"""Eligibility filter composed from the individual rule checks."""

from typing import Iterable, List, Optional

from job_assistant.config.models import EligibilityConfig
from job_assistant.domain.models import JobPosting
from job_assistant.logging import get_logger
from job_assistant.vocabulary import DEFAULT_VOCABULARY, Vocabulary

from . import rules
from .models import EligibilityResult

logger = get_logger(__name__, component="eligibility")

FULL_TIME = "full_time"
END_CLIENT = "end_client"
SALARY_FLOOR = "salary_floor"
BENEFITS = "benefits"
TARGET_ROLE = "target_role"
CERTIFICATION_REQUIRED = "certification_required"


class EligibilityFilter:
    """Decides which postings are worth scoring.

    Always applied: full-time, end-client (not a staffing agency), salary
    floor (only when a salary is stated) and benefits. Target-role and
    certification checks are added when enabled in EligibilityConfig.
    """

    def __init__(
        self,
        config: Optional[EligibilityConfig] = None,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    ):
        self.config = config or EligibilityConfig()
        self.vocabulary = vocabulary
        self._certifications = vocabulary.certifications_for(self.config.target_role)

    @property
    def filter_names(self) -> List[str]:
        """Names of the checks this filter applies, in evaluation order."""
        names = [FULL_TIME, END_CLIENT, SALARY_FLOOR, BENEFITS]
        if self.config.require_target_role:
            names.append(TARGET_ROLE)
        if self.config.require_certification:
            names.append(CERTIFICATION_REQUIRED)
        return names

    def evaluate(self, posting: JobPosting) -> EligibilityResult:
        """Run every enabled check and collect the failures."""
        vocabulary = self.vocabulary
        failed = []

        kind = rules.employment_type(posting.description, posting.title, vocabulary)
        if kind == "non_full_time":
            failed.append(FULL_TIME)

        if rules.is_staffing_company(posting.company, vocabulary):
            failed.append(END_CLIENT)

        salary = rules.extract_salary(posting.description)
        if salary is not None and salary < self.config.salary_floor:
            failed.append(SALARY_FLOOR)

        if not rules.has_benefits(posting.description, vocabulary):
            failed.append(BENEFITS)

        if self.config.require_target_role and not rules.is_target_role(
            posting.title, self.config.target_role, vocabulary
        ):
            failed.append(TARGET_ROLE)

        if self.config.require_certification:
            text = " ".join([posting.description, " ".join(posting.requirements)])
            if not rules.requires_certification(text, posting.title, self._certifications):
                failed.append(CERTIFICATION_REQUIRED)

        return EligibilityResult(
            eligible=not failed,
            failed_checks=failed,
            salary=salary,
            employment_type=kind,
        )

    def is_eligible(self, posting: JobPosting) -> bool:
        return self.evaluate(posting).eligible

    def filter_jobs(self, postings: Iterable[JobPosting]) -> List[JobPosting]:
        """Keep eligible postings, preserving order. Idempotent."""
        postings = list(postings)
        kept = []
        for posting in postings:
            result = self.evaluate(posting)
            if result.eligible:
                kept.append(posting)
                continue
            logger.debug(
                f"Excluded: {posting.title} at {posting.company}",
                extra={
                    "event": "eligibility.excluded",
                    "posting_id": posting.id,
                    "company": posting.company,
                    "failed_checks": result.failed_checks,
                    "salary": result.salary,
                },
            )

        logger.info(
            f"Eligibility filter kept {len(kept)} of {len(postings)} postings",
            extra={
                "event": "eligibility.completed",
                "input_count": len(postings),
                "kept_count": len(kept),
                "filters": self.filter_names,
            },
        )
        return kept
