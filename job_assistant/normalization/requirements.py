"""Requirement phrases pulled out of posting descriptions."""

import re
from typing import List

REQUIREMENT_PATTERNS = (
    re.compile(r"\d+\+?\s*(?:years?|yrs?)\s*(?:of\s*)?(?:experience|exp)", re.IGNORECASE),
    re.compile(r"\b(?:bachelor|master|phd|degree|bs|ms|mba)\b", re.IGNORECASE),
    re.compile(r"\b(?:pmp|certified|certification)\b", re.IGNORECASE),
    re.compile(r"\b(?:agile|scrum|kanban|waterfall)\b", re.IGNORECASE),
    re.compile(
        r"(?:\bjavascript\b|\bpython\b|\bjava\b|\bc\+\+|\breact\b|\bnode\.js\b|\bsql\b|\baws\b|\bdocker\b|\bkubernetes\b)",
        re.IGNORECASE,
    ),
)


def extract_requirements(description: str) -> List[str]:
    """Requirement phrases as written in the description, first occurrence order.

    Example:
        >>> extract_requirements("PMP required. 5+ years of experience with Agile and Scrum.")
        ['5+ years of experience', 'PMP', 'Agile', 'Scrum']
    """
    if not description:
        return []
    found: List[str] = []
    for pattern in REQUIREMENT_PATTERNS:
        found.extend(match.group(0) for match in pattern.finditer(description))
    return list(dict.fromkeys(found))
