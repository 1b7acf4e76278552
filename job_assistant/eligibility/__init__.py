"""Eligibility rules: which postings are worth scoring at all."""

from .models import EligibilityResult
from .rules import (
    employment_type,
    extract_salary,
    has_benefits,
    is_full_time,
    is_staffing_company,
    is_target_role,
    meets_salary_floor,
    requires_certification,
)
from .service import EligibilityFilter

__all__ = [
    "EligibilityFilter",
    "EligibilityResult",
    "employment_type",
    "extract_salary",
    "has_benefits",
    "is_full_time",
    "is_staffing_company",
    "is_target_role",
    "meets_salary_floor",
    "requires_certification",
]
