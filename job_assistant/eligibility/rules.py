"""Pure eligibility checks over a posting's own text.

Each check takes plain strings and a vocabulary so it can be used on its
own (e.g. to explain an exclusion) or composed by EligibilityFilter.
"""

import re
from typing import Iterable, List, Optional

from job_assistant.vocabulary import DEFAULT_VOCABULARY, Vocabulary

# Amounts are in thousands: "$120k", "$120,000", "120k per year",
# "Salary: $120k", "100k - $150k" (range: higher bound)
SALARY_PATTERNS = (
    re.compile(r"\$(\d{1,3})(?:k|,000)", re.IGNORECASE),
    re.compile(r"(\d{1,3})(?:k|,000)\s*(?:per\s*)?(?:year|annum|annually|yr)", re.IGNORECASE),
    re.compile(r"salary[:\s]+(?:range[:\s]+)?\$?(\d{1,3})(?:k|,000)", re.IGNORECASE),
    re.compile(r"(\d{1,3})(?:k|,000)\s*-\s*\$?(\d{1,3})(?:k|,000)", re.IGNORECASE),
)

REQUIREMENT_WORDS = r"(?:required|must|mandatory|necessary|essential|qualification|prerequisite|preferred)"
CERTIFICATION_PROXIMITY = 100


def is_staffing_company(company: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    """True if the company name contains a staffing/recruiting denylist entry."""
    name = (company or "").lower().strip()
    if not name:
        return False
    return any(entry in name for entry in vocabulary.staffing_companies)


def employment_type(
    description: Optional[str], title: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> str:
    """Classify as 'non_full_time', 'full_time' or 'unspecified'.

    Exclusion terms win over full-time indicators.
    """
    text = f"{description or ''} {title or ''}".lower()
    if any(term in text for term in vocabulary.full_time_exclusions):
        return "non_full_time"
    if any(term in text for term in vocabulary.full_time_indicators):
        return "full_time"
    return "unspecified"


def is_full_time(
    description: Optional[str], title: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> bool:
    """Full-time unless the text uses part-time/contract language.

    Postings that say nothing either way count as full-time.
    """
    return employment_type(description, title, vocabulary) != "non_full_time"


def extract_salary(description: Optional[str]) -> Optional[float]:
    """Highest salary mentioned, in thousands, or None.

    Example:
        >>> extract_salary("Pay: $110k - $135k plus bonus")
        135.0
    """
    if not description:
        return None

    highest = 0.0
    for pattern in SALARY_PATTERNS:
        for match in pattern.finditer(description):
            amounts = [int(group) for group in match.groups() if group]
            salary = float(max(amounts))
            if salary > 1000:
                salary = salary / 1000
            highest = max(highest, salary)
    return highest if highest > 0 else None


def meets_salary_floor(description: Optional[str], floor: float) -> bool:
    """Only a stated salary below the floor disqualifies."""
    salary = extract_salary(description)
    return salary is None or salary >= floor


def has_benefits(description: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    text = (description or "").lower()
    return any(phrase in text for phrase in vocabulary.benefit_phrases)


def is_target_role(
    title: Optional[str], role: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> bool:
    """True if the title names any title in the role's family."""
    lowered = (title or "").lower()
    return any(family_title in lowered for family_title in vocabulary.role_family_for(role))


def requires_certification(
    text: Optional[str],
    title: Optional[str],
    certifications: Iterable[str],
) -> bool:
    """True if the posting asks for one of ``certifications``, not just mentions it.

    Accepts explicit requirement phrasing ("PMP required", "must have PMP",
    "PMP certification"), a certification named within 100 characters of
    requirement language, or a certification in the title.
    """
    names = [name.lower() for name in certifications if name]
    if not names:
        return False
    lowered = f"{text or ''} {title or ''}".lower()
    cert = "(?:" + "|".join(re.escape(name) for name in names) + ")"

    for pattern in _certification_patterns(cert):
        if pattern.search(lowered):
            return True

    mentions = [m.start() for m in re.finditer(rf"\b{cert}\b", lowered)]
    if mentions:
        requirements = [m.start() for m in re.finditer(REQUIREMENT_WORDS, lowered)]
        if any(abs(a - b) < CERTIFICATION_PROXIMITY for a in mentions for b in requirements):
            return True

    return bool(re.search(rf"\b{cert}\b", (title or "").lower()))


def _certification_patterns(cert: str) -> List["re.Pattern"]:
    return [
        re.compile(rf"\b{cert}\s+(?:is\s+)?(?:required|mandatory|necessary|essential|must|needed|preferred)"),
        re.compile(rf"(?:required|must have|must possess|must be)\s+{cert}"),
        re.compile(rf"(?:required|mandatory|necessary|essential)\s+{cert}"),
        re.compile(rf"\b{cert}\s+(?:certified|certification)"),
        re.compile(
            rf"(?:candidates?|applicants?|individuals?)\s+(?:must|should|are required to)\s+"
            rf"(?:have|possess|be)\s+{cert}"
        ),
    ]
