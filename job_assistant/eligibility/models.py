"""Result models for eligibility evaluation."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class EligibilityResult:
    """Outcome of running every enabled check against one posting.

    Attributes:
        eligible: True when no check failed
        failed_checks: Names of the checks that failed, in evaluation order
        salary: Salary found in the description, in thousands
        employment_type: 'full_time', 'non_full_time' or 'unspecified'
    """

    eligible: bool
    failed_checks: List[str] = field(default_factory=list)
    salary: Optional[float] = None
    employment_type: str = "unspecified"

    @property
    def reason(self) -> str:
        return ", ".join(self.failed_checks) if self.failed_checks else "eligible"
