"""Derive ResumeData fields from resume plain text."""

import re
from typing import Iterable, List, Optional

from job_assistant.domain.models import ResumeData
from job_assistant.logging import get_logger
from job_assistant.vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = get_logger(__name__, component="resume")

EXPERIENCE_RE = re.compile(r"(\d+)\+?\s*(years?|yrs?)\s*(of\s*)?(experience|exp)", re.IGNORECASE)

_ROLE_SUFFIX = (
    r"(?:Manager|Engineer|Developer|Director|Lead|Specialist|Analyst|Consultant|Coordinator|"
    r"Administrator|Executive|Architect|Designer|Scrum|Product|Project|Program|Business|Data|"
    r"Software|Systems|DevOps|QA|Test|Security|Network|Cloud|Full.?Stack|Front.?end|Back.?end|"
    r"Mobile|iOS|Android|Machine.?Learning|Data.?Science|Sales|Marketing|HR|Finance|Operations)"
)
_TITLE_BODY = rf"([A-Z][a-zA-Z &]+{_ROLE_SUFFIX})"

TITLE_PATTERNS = (
    re.compile(rf"(?:current|present|role|position|title)[ \t:]+{_TITLE_BODY}", re.IGNORECASE),
    re.compile(
        rf"(?:worked as|served as|held the position of|position of)[ \t:]+{_TITLE_BODY}", re.IGNORECASE
    ),
    re.compile(rf"^{_TITLE_BODY}", re.MULTILINE),
)

TITLE_SCAN_LINES = 10


class ResumeParser:
    """Builds ResumeData from extracted resume text.

    Example:
        >>> resume = ResumeParser().parse("Project Manager\\nPMP certified, 8 years of experience")
        >>> resume.job_title, resume.experience
        ('Project Manager', ('8 years of experience',))
    """

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary

    def parse(
        self,
        text: Optional[str],
        job_title: Optional[str] = None,
        job_keywords: Optional[Iterable[str]] = None,
    ) -> ResumeData:
        """Parse resume text; explicit title/keywords override the detected ones."""
        text = text or ""
        resume = ResumeData(
            text=text,
            skills=tuple(self.extract_skills(text)),
            experience=tuple(self.extract_experience(text)),
            education=tuple(self.extract_education(text)),
            job_title=job_title or self.extract_job_title(text),
            job_keywords=tuple(job_keywords) if job_keywords is not None else tuple(self.extract_job_keywords(text)),
        )
        logger.info(
            "Resume parsed",
            extra={
                "event": "resume.parsed",
                "skills": len(resume.skills),
                "job_title": resume.job_title,
                "job_keywords": list(resume.job_keywords),
            },
        )
        return resume

    def extract_skills(self, text: str) -> List[str]:
        lowered = text.lower()
        return [skill for skill in self.vocabulary.resume_skills if skill.lower() in lowered]

    @staticmethod
    def extract_experience(text: str) -> List[str]:
        """Phrases like '5+ years of experience', as written."""
        return [match.group(0) for match in EXPERIENCE_RE.finditer(text)]

    def extract_education(self, text: str) -> List[str]:
        return [marker for marker in self.vocabulary.resume_education_markers if marker in text]

    def extract_job_title(self, text: str) -> Optional[str]:
        """Labelled or leading role titles first, then well-known titles near the top."""
        for pattern in TITLE_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(1).strip()

        for line in text.splitlines()[:TITLE_SCAN_LINES]:
            lowered = line.lower()
            for title in self.vocabulary.common_titles:
                if title.lower() in lowered:
                    return title
        return None

    def extract_job_keywords(self, text: str) -> List[str]:
        """Coarse domain tags, certification tags first."""
        lowered = text.lower()
        tags: List[str] = []

        for names in self.vocabulary.certifications.values():
            if any(re.search(rf"\b{re.escape(name)}\b", lowered) for name in names):
                short = names[0]
                tags.extend([short, f"{short} certified", *names[1:]])

        for domain, indicators in self.vocabulary.domain_tags.items():
            if any(indicator in lowered for indicator in indicators):
                tags.append(domain)

        return list(dict.fromkeys(tags))
