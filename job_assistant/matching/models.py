"""Data models for the match scorer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from job_assistant.domain.models import JobPosting


class Recommendation(str, Enum):
    """Binary advice attached to every match."""

    APPLY = "apply"
    SKIP = "skip"


@dataclass
class KeywordMatchResult:
    """Outcome of comparing job keywords against resume keywords.

    Attributes:
        job_keywords: Every keyword extracted from the posting, priority first
        matched: Job keywords with a counterpart in the resume
        missing: Job keywords without one
    """

    job_keywords: List[str] = field(default_factory=list)
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def ratio(self) -> float:
        """Matched share of job keywords; 0.0 when the posting yielded none."""
        if not self.job_keywords:
            return 0.0
        return len(self.matched) / len(self.job_keywords)


@dataclass(frozen=True)
class ScoringSignals:
    """Intermediate signals the score and the reasons are derived from."""

    keyword_ratio: float
    matched_count: int
    job_keyword_count: int
    role_match: float
    experience_match: float
    education_match: float
    target_role_bonus: bool


@dataclass(frozen=True)
class JobMatch:
    """Score, recommendation and explanation for one (resume, posting) pair.

    ``job`` is the scored posting itself, not a copy.
    """

    job: JobPosting
    score: int
    recommendation: Recommendation
    reasons: Tuple[str, ...]
    matched_skills: Tuple[str, ...]
    missing_skills: Tuple[str, ...]
    signals: ScoringSignals

    @property
    def should_apply(self) -> bool:
        return self.recommendation == Recommendation.APPLY
