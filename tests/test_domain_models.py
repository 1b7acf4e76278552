"""Unit tests for domain models."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from job_assistant.domain.models import ApplicationRecord, JobPosting, RawPosting, ResumeData

from tests.helpers import make_posting

NOW = datetime(2025, 11, 4, 12, 0, tzinfo=timezone.utc)


class TestRawPosting:
    """Tests for RawPosting model."""

    def test_valid_raw_posting(self):
        """Test creating a RawPosting with all fields."""
        raw = RawPosting(
            external_id="3791",
            title="Senior Project Manager",
            company="Toyota",
            location="Plano, TX",
            description="PMP required",
            url="https://www.linkedin.com/jobs/view/3791",
            apply_url="https://careers.toyota.com/apply/3791",
            posted_text="1 day ago",
        )
        assert raw.title == "Senior Project Manager"
        assert raw.posted_text == "1 day ago"

    def test_strips_whitespace(self):
        """Test that title and company are stripped."""
        raw = RawPosting(title="  Project Manager ", company=" Toyota ")
        assert raw.title == "Project Manager"
        assert raw.company == "Toyota"

    @pytest.mark.parametrize("field", ["title", "company"])
    def test_blank_required_field(self, field):
        """Test that title and company cannot be blank."""
        values = {"title": "Project Manager", "company": "Toyota", field: "   "}
        with pytest.raises(ValidationError):
            RawPosting(**values)

    def test_none_and_blank_optionals(self):
        """Test that None text becomes empty and blank ids become None."""
        raw = RawPosting(
            title="Project Manager", company="Toyota", description=None, external_id=" ", posted_text=""
        )
        assert raw.description == ""
        assert raw.external_id is None
        assert raw.posted_text is None


class TestJobPosting:
    """Tests for JobPosting model."""

    def test_apply_url_defaults_to_url(self):
        """Test that a missing apply link falls back to the listing URL."""
        posting = JobPosting(
            id="a", title="Project Manager", company="Toyota", posted_date=NOW,
            url="https://www.linkedin.com/jobs/view/1", source="linkedin",
        )
        assert posting.apply_url == "https://www.linkedin.com/jobs/view/1"

    def test_naive_date_becomes_utc(self):
        """Test that posted_date is always aware UTC."""
        posting = make_posting(posted_date=datetime(2025, 11, 4, 12, 0))
        assert posting.posted_date == NOW

    def test_offset_date_converted(self):
        """Test that other offsets are converted to UTC."""
        central = timezone(timedelta(hours=-6))
        posting = make_posting(posted_date=datetime(2025, 11, 4, 6, 0, tzinfo=central))
        assert posting.posted_date.tzinfo == timezone.utc
        assert posting.posted_date == NOW

    def test_frozen(self):
        """Test that postings cannot be modified."""
        posting = make_posting()
        with pytest.raises(ValidationError):
            posting.title = "Changed"

    def test_requirements_are_tuple(self):
        """Test that requirement lists are stored as tuples."""
        posting = make_posting(requirements=["PMP", "Agile"])
        assert posting.requirements == ("PMP", "Agile")


class TestResumeData:
    """Tests for ResumeData model."""

    def test_defaults(self):
        """Test an empty resume."""
        resume = ResumeData(text=None)
        assert resume.text == ""
        assert resume.skills == ()
        assert resume.job_title is None


class TestApplicationRecord:
    """Tests for ApplicationRecord model."""

    def test_for_posting(self):
        """Test building a record from a posting."""
        posting = make_posting(apply_url="https://careers.toyota.com/apply/3791")
        record = ApplicationRecord.for_posting(posting, NOW)
        assert record.job_id == posting.id
        assert record.job_title == "Senior Project Manager"
        assert record.company == "Toyota"
        assert record.apply_url == "https://careers.toyota.com/apply/3791"
        assert record.applied_at == NOW
