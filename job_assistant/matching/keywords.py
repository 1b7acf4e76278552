"""Vocabulary and pattern based keyword extraction.

Terms are found by plain substring containment on lowercased text, so
"machine learning" matches as a phrase and "java" also matches inside
"javascript". That trade of precision for recall is intended.
"""

import re
from typing import Iterable, List, Optional

from job_assistant.utils.text import split_words
from job_assistant.vocabulary import DEFAULT_VOCABULARY, Vocabulary

PHRASE_PATTERNS = (
    re.compile(r"(\d+)\+?\s*(years?|yrs?)\s*(of\s*)?(experience|exp)", re.IGNORECASE),
    re.compile(r"(bachelor|master|phd|doctorate)\s+(degree|in|of)", re.IGNORECASE),
    re.compile(r"(certified|certification)\s+in", re.IGNORECASE),
    re.compile(r"(proficient|expert|experienced)\s+in", re.IGNORECASE),
    re.compile(r"(strong|excellent|deep)\s+(knowledge|understanding|experience)", re.IGNORECASE),
)

MIN_KEYWORD_LENGTH = 2
MIN_CONTEXT_WORD_LENGTH = 3


class KeywordExtractor:
    """Turns free text into an ordered, de-duplicated keyword list.

    Order of the result: priority terms, vocabulary terms, structured
    phrases, then title and company words. The first occurrence of a
    keyword wins its position.
    """

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary

    def extract(
        self,
        text: Optional[str],
        title: Optional[str] = None,
        company: Optional[str] = None,
    ) -> List[str]:
        """Extract keywords from ``text``, optionally adding title/company words.

        Example:
            >>> KeywordExtractor().extract("PMP certified, Agile and Scrum")[:3]
            ['agile', 'scrum', 'pmp']
        """
        lowered = (text or "").lower()
        found: List[str] = []

        if lowered:
            found.extend(self._vocabulary_hits(lowered, self.vocabulary.priority_terms))
            found.extend(self._vocabulary_hits(lowered, self.vocabulary.skills))
            found.extend(self._phrase_hits(lowered))

        for context in (title, company):
            if context:
                found.extend(
                    word for word in split_words(context.lower())
                    if len(word) >= MIN_CONTEXT_WORD_LENGTH
                )

        return [kw for kw in dict.fromkeys(found) if len(kw) >= MIN_KEYWORD_LENGTH]

    def prioritize(self, keywords: Iterable[str]) -> List[str]:
        """Stable partition: priority keywords first, the rest in original order."""
        keywords = list(keywords)
        priority = [kw for kw in keywords if self.vocabulary.is_priority(kw)]
        rest = [kw for kw in keywords if not self.vocabulary.is_priority(kw)]
        return priority + rest

    @staticmethod
    def _vocabulary_hits(lowered: str, terms: Iterable[str]) -> List[str]:
        return [term for term in terms if term in lowered]

    @staticmethod
    def _phrase_hits(lowered: str) -> List[str]:
        hits = []
        for pattern in PHRASE_PATTERNS:
            hits.extend(match.group(0).strip() for match in pattern.finditer(lowered))
        return hits
