"""Resume-to-posting match scoring.

The score blends five signals, each weighted by ScoringPolicy:
1. Keyword overlap: matched share of the posting's keywords, plus points per
   matched keyword and a flat bonus past a minimum count
2. Role match: how well the resume's title or domain fits the posting
3. Experience: resume years against the first "N years" in the description
4. Education: whether a stated education requirement is covered
5. Target role bonus: the posting sits in the configured role category

Scoring is a pure function of its inputs and never raises on sparse data;
missing fields fall back to the neutral values documented per signal.
"""

import math
import re
from typing import Iterable, List, Optional, Sequence

from job_assistant.config.models import ScoringPolicy
from job_assistant.domain.models import JobPosting, ResumeData
from job_assistant.logging import get_logger
from job_assistant.utils.text import split_words
from job_assistant.vocabulary import DEFAULT_VOCABULARY, Vocabulary

from .keywords import KeywordExtractor
from .models import JobMatch, KeywordMatchResult, Recommendation, ScoringSignals

logger = get_logger(__name__, component="matching")

YEARS_RE = re.compile(r"(\d+)\+?\s*(years?|yrs?)", re.IGNORECASE)

# Neutral and fallback values for the partial signals
NO_REQUIREMENT_EXPERIENCE = 0.5
UNKNOWN_RESUME_EXPERIENCE = 0.3
PARTIAL_EDUCATION = 0.5
TITLE_OVERLAP_ROLE = 0.4
SIGNIFICANT_WORD_LENGTH = 4

REASON_SAMPLE_SIZE = 5
MISSING_DETAIL_LIMIT = 10


class MatchScorer:
    """Scores resumes against postings and ranks the results."""

    def __init__(
        self,
        policy: Optional[ScoringPolicy] = None,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        extractor: Optional[KeywordExtractor] = None,
    ):
        self.policy = policy or ScoringPolicy()
        self.vocabulary = vocabulary
        self.extractor = extractor or KeywordExtractor(vocabulary)
        self._target_titles = vocabulary.target_titles_for(self.policy.target_role)

    def score(self, resume: ResumeData, job: JobPosting) -> JobMatch:
        """Score one posting against one resume."""
        job_text = " ".join([job.description, " ".join(job.requirements), job.title])
        job_keywords = self.extractor.prioritize(
            self.extractor.extract(job_text, title=job.title, company=job.company)
        )
        resume_keywords = self.extractor.prioritize(self.extractor.extract(resume.text))
        keyword_result = match_keywords(resume_keywords, job_keywords)

        signals = ScoringSignals(
            keyword_ratio=keyword_result.ratio,
            matched_count=len(keyword_result.matched),
            job_keyword_count=len(job_keywords),
            role_match=self.role_match(resume, job),
            experience_match=experience_match(resume, job),
            education_match=education_match(resume, job, self.vocabulary),
            target_role_bonus=self.is_target_role(job),
        )

        score = self.combine(signals)
        limit = self.policy.display_limit
        return JobMatch(
            job=job,
            score=score,
            recommendation=self.recommend(score, signals),
            reasons=tuple(build_reasons(signals, keyword_result)),
            matched_skills=tuple(keyword_result.matched[:limit]),
            missing_skills=tuple(keyword_result.missing[:limit]),
            signals=signals,
        )

    def score_all(self, resume: ResumeData, postings: Iterable[JobPosting]) -> List[JobMatch]:
        """Score every posting; best first, ties kept in input order."""
        matches = [self.score(resume, posting) for posting in postings]
        # sorted() is stable, so equal scores keep posting order
        ranked = sorted(matches, key=lambda match: match.score, reverse=True)

        logger.info(
            f"Scored {len(ranked)} postings",
            extra={
                "event": "scoring.completed",
                "postings": len(ranked),
                "apply_count": sum(1 for match in ranked if match.should_apply),
                "top_score": ranked[0].score if ranked else None,
            },
        )
        return ranked

    def combine(self, signals: ScoringSignals) -> int:
        """Weighted sum of the signals, clamped to 0-100 and rounded half up."""
        policy = self.policy
        total = signals.keyword_ratio * policy.keyword_ratio_points
        total += min(policy.match_points_cap, signals.matched_count * policy.points_per_match)
        if signals.matched_count >= policy.multi_match_min:
            total += policy.multi_match_bonus
        total += signals.role_match * policy.role_points
        total += signals.experience_match * policy.experience_points
        total += signals.education_match * policy.education_points
        if signals.target_role_bonus:
            total += policy.target_role_bonus

        clamped = min(100.0, max(0.0, total))
        return int(math.floor(clamped + 0.5))

    def recommend(self, score: int, signals: ScoringSignals) -> Recommendation:
        if score >= self.policy.apply_threshold:
            return Recommendation.APPLY
        if signals.target_role_bonus and signals.matched_count >= self.policy.bonus_min_matches:
            return Recommendation.APPLY
        return Recommendation.SKIP

    def is_target_role(self, job: JobPosting) -> bool:
        """True if the title or description names the target role."""
        text = f"{job.title} {job.description}".lower()
        return any(title in text for title in self._target_titles)

    def role_match(self, resume: ResumeData, job: JobPosting) -> float:
        """Role fit in [0, 1] using a layered fallback.

        1. Declared resume title: containment against the job title gives 1.0;
           otherwise a matching role category scores 0.6 plus 0.2 per
           category term present in the posting.
        2. Resume domain tags: 0.5 plus 0.2 per tag present in the posting.
        3. Significant job-title words present in the resume text: 0.4 when
           at least half of them are found, which a title with no
           significant words always is.
        """
        job_title = job.title.lower()
        job_description = job.description.lower()

        if resume.job_title:
            resume_title = resume.job_title.lower().strip()
            first_word = job_title.split(" ")[0] if job_title else ""
            if resume_title and (resume_title in job_title or (first_word and first_word in resume_title)):
                return 1.0

            for category, terms in self.vocabulary.role_categories.items():
                if category in resume_title:
                    hits = sum(1 for term in terms if term in job_title or term in job_description)
                    if hits:
                        return min(1.0, 0.6 + 0.2 * hits)

        if resume.job_keywords:
            posting_text = f"{job_title} {job_description}"
            hits = sum(1 for tag in resume.job_keywords if tag.lower() in posting_text)
            if hits:
                return min(1.0, 0.5 + 0.2 * hits)

        significant = [word for word in job_title.split(" ") if len(word) >= SIGNIFICANT_WORD_LENGTH]
        resume_text = resume.text.lower()
        found = sum(1 for word in significant if word in resume_text)
        return TITLE_OVERLAP_ROLE if found >= len(significant) * 0.5 else 0.0


def match_keywords(resume_keywords: Sequence[str], job_keywords: Sequence[str]) -> KeywordMatchResult:
    """Split job keywords into matched and missing.

    A job keyword matches a resume keyword on exact equality, substring
    containment in either direction, or containment between any of their
    words (split on whitespace, hyphens, underscores).
    """
    result = KeywordMatchResult(job_keywords=list(job_keywords))
    resume_words = [(kw, split_words(kw)) for kw in resume_keywords]

    for job_kw in job_keywords:
        job_words = split_words(job_kw)
        if any(_keywords_match(job_kw, job_words, resume_kw, words) for resume_kw, words in resume_words):
            result.matched.append(job_kw)
        else:
            result.missing.append(job_kw)
    return result


def _keywords_match(job_kw: str, job_words: List[str], resume_kw: str, resume_words: List[str]) -> bool:
    if job_kw == resume_kw or job_kw in resume_kw or resume_kw in job_kw:
        return True
    return any(
        rw == jw or jw in rw or rw in jw
        for rw in resume_words
        for jw in job_words
    )


def experience_match(resume: ResumeData, job: JobPosting) -> float:
    """Resume years against the first years figure in the description."""
    required = YEARS_RE.search(job.description)
    if not required:
        return NO_REQUIREMENT_EXPERIENCE

    claimed = YEARS_RE.search(" ".join(resume.experience))
    if not claimed:
        return UNKNOWN_RESUME_EXPERIENCE

    required_years = int(required.group(1))
    resume_years = int(claimed.group(1))
    if resume_years >= required_years:
        return 1.0
    if resume_years >= required_years * 0.8:
        return 0.8
    if resume_years >= required_years * 0.6:
        return 0.6
    return 0.3


def education_match(resume: ResumeData, job: JobPosting, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> float:
    """1.0 unless the posting asks for education the resume does not show."""
    description = job.description.lower()
    if not any(term in description for term in vocabulary.education_terms):
        return 1.0
    return 1.0 if resume.education else PARTIAL_EDUCATION


def build_reasons(signals: ScoringSignals, keywords: KeywordMatchResult) -> List[str]:
    """Human-readable justification lines, derived only from the signals."""
    matched, total = signals.matched_count, signals.job_keyword_count
    ratio = signals.keyword_ratio

    if ratio >= 0.8:
        reasons = [f"Excellent keyword match: {matched} out of {total} required keywords found"]
    elif ratio >= 0.6:
        reasons = [f"Good keyword match: {matched} out of {total} required keywords found"]
    elif ratio >= 0.4:
        reasons = [f"Moderate keyword match: {matched} out of {total} required keywords found"]
    else:
        reasons = [f"Limited keyword match: Only {matched} out of {total} required keywords found"]

    if keywords.matched:
        reasons.append(f"Matched keywords: {_sample(keywords.matched)}")

    missing_count = len(keywords.missing)
    if 0 < missing_count <= MISSING_DETAIL_LIMIT:
        reasons.append(f"Missing important keywords: {_sample(keywords.missing)}")
    elif missing_count > MISSING_DETAIL_LIMIT:
        reasons.append(f"Missing many required keywords ({missing_count} total)")

    if signals.role_match >= 0.8:
        reasons.append("Job role closely matches your background")
    elif signals.role_match < 0.3:
        reasons.append("Job role may not match your background")

    if signals.experience_match > 0.8:
        reasons.append("Experience level matches job requirements")

    return reasons


def _sample(keywords: Sequence[str]) -> str:
    text = ", ".join(keywords[:REASON_SAMPLE_SIZE])
    return text + "..." if len(keywords) > REASON_SAMPLE_SIZE else text
