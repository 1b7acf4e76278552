"""Unit tests for the eligibility rules and filter."""

import pytest

from job_assistant.config.models import EligibilityConfig
from job_assistant.eligibility import rules
from job_assistant.eligibility.service import (
    BENEFITS,
    CERTIFICATION_REQUIRED,
    END_CLIENT,
    FULL_TIME,
    SALARY_FLOOR,
    TARGET_ROLE,
    EligibilityFilter,
)
from job_assistant.vocabulary import Vocabulary

from tests.helpers import make_posting


@pytest.fixture
def eligibility_filter():
    """Filter with the default configuration."""
    return EligibilityFilter()


# ============================================================================
# Scenarios
# ============================================================================


class TestScenarios:
    """Reference postings run through the default filter."""

    def test_direct_employer_posting_is_eligible(self, eligibility_filter):
        """Test that the Toyota PM posting passes every check."""
        result = eligibility_filter.evaluate(make_posting())
        assert result.eligible is True
        assert result.failed_checks == []
        assert result.salary == 120.0
        assert result.employment_type == "full_time"

    def test_staffing_agency_is_excluded(self, eligibility_filter):
        """Test that the same posting from Robert Half is excluded."""
        posting = make_posting(company="Robert Half")
        assert rules.is_staffing_company(posting.company) is True
        assert eligibility_filter.evaluate(posting).failed_checks == [END_CLIENT]
        assert eligibility_filter.filter_jobs([posting]) == []

    def test_missing_salary_passes(self, eligibility_filter):
        """Test that a posting without salary is not disqualified by the floor."""
        posting = make_posting(description="PMP required, Agile, full-time, benefits included")
        result = eligibility_filter.evaluate(posting)
        assert result.salary is None
        assert result.eligible is True

    def test_low_salary_part_time_fails_both(self, eligibility_filter):
        """Test that "$80k, part-time" fails full-time and salary floor."""
        posting = make_posting(description="$80k, part-time, benefits included")
        result = eligibility_filter.evaluate(posting)
        assert result.eligible is False
        assert FULL_TIME in result.failed_checks
        assert SALARY_FLOOR in result.failed_checks
        assert result.reason == "full_time, salary_floor"


# ============================================================================
# Filter behaviour
# ============================================================================


class TestEligibilityFilter:
    """Test EligibilityFilter composition."""

    def test_default_filter_names(self, eligibility_filter):
        """Test the always-on checks."""
        assert eligibility_filter.filter_names == [FULL_TIME, END_CLIENT, SALARY_FLOOR, BENEFITS]

    def test_optional_filter_names(self):
        """Test that optional checks are listed when enabled."""
        config = EligibilityConfig(require_target_role=True, require_certification=True)
        assert EligibilityFilter(config).filter_names[-2:] == [TARGET_ROLE, CERTIFICATION_REQUIRED]

    def test_missing_benefits_excluded(self, eligibility_filter):
        """Test that postings without benefit language are excluded."""
        posting = make_posting(description="Full-time project manager, $130k")
        assert eligibility_filter.evaluate(posting).failed_checks == [BENEFITS]

    def test_salary_floor_configurable(self):
        """Test that the salary floor comes from configuration."""
        posting = make_posting()
        assert EligibilityFilter(EligibilityConfig(salary_floor=150)).is_eligible(posting) is False
        assert EligibilityFilter(EligibilityConfig(salary_floor=120)).is_eligible(posting) is True

    def test_target_role_check(self):
        """Test the optional target-role title check."""
        eligibility_filter = EligibilityFilter(EligibilityConfig(require_target_role=True))
        assert eligibility_filter.is_eligible(make_posting()) is True
        software = make_posting(title="Software Engineer")
        assert eligibility_filter.evaluate(software).failed_checks == [TARGET_ROLE]

    def test_certification_check(self):
        """Test the optional certification-required check."""
        eligibility_filter = EligibilityFilter(EligibilityConfig(require_certification=True))
        assert eligibility_filter.is_eligible(make_posting()) is True

        mention = make_posting(
            description="Full-time, benefits included. Familiarity with PMP concepts is a plus.",
            requirements=("PMP",),
        )
        assert eligibility_filter.evaluate(mention).failed_checks == [CERTIFICATION_REQUIRED]

    def test_filter_keeps_order_and_is_idempotent(self, eligibility_filter):
        """Test that filtering twice gives the same ordered result."""
        postings = [
            make_posting(id="a"),
            make_posting(id="b", company="Randstad"),
            make_posting(id="c", title="Program Manager"),
        ]
        once = eligibility_filter.filter_jobs(postings)
        assert [p.id for p in once] == ["a", "c"]
        assert eligibility_filter.filter_jobs(once) == once

    def test_custom_vocabulary(self):
        """Test that an injected denylist is used."""
        vocabulary = Vocabulary(staffing_companies=("toyota",))
        assert EligibilityFilter(vocabulary=vocabulary).is_eligible(make_posting()) is False


# ============================================================================
# Individual rules
# ============================================================================


class TestStaffingCompany:
    """Test the staffing denylist."""

    @pytest.mark.parametrize("company", ["Robert Half", "TEKsystems Inc", "Insight Global", "Acme Recruiting"])
    def test_denylisted(self, company):
        """Test that denylisted names match case-insensitively."""
        assert rules.is_staffing_company(company) is True

    @pytest.mark.parametrize("company", ["Toyota", "PepsiCo", "", None])
    def test_end_clients(self, company):
        """Test that ordinary and missing names pass."""
        assert rules.is_staffing_company(company) is False


class TestEmploymentType:
    """Test full-time classification."""

    def test_exclusion_wins(self):
        """Test that part-time language beats full-time language."""
        assert rules.employment_type("Full-time or part-time", None) == "non_full_time"

    def test_full_time(self):
        """Test explicit full-time language."""
        assert rules.employment_type("Permanent position", None) == "full_time"

    def test_unspecified_counts_as_full_time(self):
        """Test that silent postings are treated as full-time."""
        assert rules.employment_type("Lead delivery", "Project Manager") == "unspecified"
        assert rules.is_full_time("Lead delivery", "Project Manager") is True

    def test_title_considered(self):
        """Test that the title is part of the classified text."""
        assert rules.is_full_time("", "Freelance Project Manager") is False


class TestSalary:
    """Test salary extraction and the floor."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Compensation $120k plus bonus", 120.0),
            ("Pays $120,000 annually", 120.0),
            ("Salary: $95k", 95.0),
            ("110k - $135k depending on experience", 135.0),
            ("90K per year", 90.0),
            ("No pay details", None),
            ("", None),
        ],
    )
    def test_extract_salary(self, text, expected):
        """Test the supported salary formats."""
        assert rules.extract_salary(text) == expected

    def test_floor(self):
        """Test that only a stated salary below the floor fails."""
        assert rules.meets_salary_floor("$99k", 100) is False
        assert rules.meets_salary_floor("$100k", 100) is True
        assert rules.meets_salary_floor(None, 100) is True


class TestCertification:
    """Test certification requirement detection."""

    @pytest.mark.parametrize(
        "text",
        [
            "PMP required",
            "Candidates must have PMP",
            "PMP certification",
            "Mandatory PMP credential",
            "Qualifications: a current PMP",
        ],
    )
    def test_required(self, text):
        """Test phrasings that make the certification a requirement."""
        assert rules.requires_certification(text, "", ["pmp"]) is True

    def test_title_mention(self):
        """Test that a certification in the title counts."""
        assert rules.requires_certification("", "Project Manager (PMP)", ["pmp"]) is True

    def test_loose_mention(self):
        """Test that an incidental mention does not count."""
        text = "Our team enjoys learning new things. " * 4 + "Some of us hold a PMP."
        assert rules.requires_certification(text, "Project Manager", ["pmp"]) is False

    def test_no_certifications_configured(self):
        """Test that an empty certification list never matches."""
        assert rules.requires_certification("PMP required", "", []) is False
