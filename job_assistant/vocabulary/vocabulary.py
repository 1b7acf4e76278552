"""Immutable bundle of every term table used by extraction, filtering and scoring."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from . import tables


def _frozen_table(table) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({key: tuple(values) for key, values in table.items()})


@dataclass(frozen=True)
class Vocabulary:
    """Term tables injected into the extractor, filter, scorer and resume parser.

    Tests build small custom vocabularies with ``Vocabulary(skills=(...), ...)``;
    any table not passed falls back to the built-in one.
    """

    skills: Tuple[str, ...] = tables.SKILL_TERMS
    priority_terms: Tuple[str, ...] = tables.PRIORITY_TERMS
    staffing_companies: Tuple[str, ...] = tables.STAFFING_COMPANIES
    benefit_phrases: Tuple[str, ...] = tables.BENEFIT_PHRASES
    full_time_exclusions: Tuple[str, ...] = tables.FULL_TIME_EXCLUSIONS
    full_time_indicators: Tuple[str, ...] = tables.FULL_TIME_INDICATORS
    education_terms: Tuple[str, ...] = tables.EDUCATION_TERMS
    resume_education_markers: Tuple[str, ...] = tables.RESUME_EDUCATION_MARKERS
    resume_skills: Tuple[str, ...] = tables.RESUME_SKILLS
    common_titles: Tuple[str, ...] = tables.COMMON_TITLES
    role_categories: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: _frozen_table(tables.ROLE_CATEGORIES)
    )
    domain_tags: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: _frozen_table(tables.DOMAIN_TAGS)
    )
    target_role_titles: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: _frozen_table(tables.TARGET_ROLE_TITLES)
    )
    role_family_titles: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: _frozen_table(tables.ROLE_FAMILY_TITLES)
    )
    certifications: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: _frozen_table(tables.CERTIFICATIONS)
    )

    def __post_init__(self):
        for name in ("role_categories", "domain_tags", "target_role_titles",
                     "role_family_titles", "certifications"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, _frozen_table(value))

    def is_priority(self, keyword: str) -> bool:
        """True if ``keyword`` contains, or is contained in, a priority term."""
        lowered = keyword.lower()
        if not lowered:
            return False
        return any(lowered in term or term in lowered for term in self.priority_terms)

    def target_titles_for(self, role: str) -> Tuple[str, ...]:
        """Title phrases that place a posting in ``role``; the role itself if unknown."""
        role = role.strip().lower()
        return self.target_role_titles.get(role, (role,) if role else ())

    def role_family_for(self, role: str) -> Tuple[str, ...]:
        role = role.strip().lower()
        return self.role_family_titles.get(role, self.target_titles_for(role))

    def certifications_for(self, role: str) -> Tuple[str, ...]:
        return self.certifications.get(role.strip().lower(), ())


DEFAULT_VOCABULARY = Vocabulary()


def is_priority_keyword(keyword: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    return vocabulary.is_priority(keyword)
