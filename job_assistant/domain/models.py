"""Core domain models for postings, resumes and application records.

- RawPosting: provider-neutral record returned by source adapters
- JobPosting: normalized, immutable posting that flows through filtering and scoring
- ResumeData: fields derived from one uploaded resume
- ApplicationRecord: a posting the user has applied to
"""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from job_assistant.utils.timestamps import ensure_utc


class RawPosting(BaseModel):
    """Posting as scraped, before normalization.

    Adapters map their provider's field names onto this shape. Title and
    company are the only hard requirements; a record without them fails
    validation and is dropped at the adapter.
    """

    external_id: Optional[str] = Field(None, description="Provider-side posting id")
    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    location: str = Field("", description="Free-text location")
    description: str = Field("", description="Description, possibly HTML")
    url: str = Field("", description="Link to the listing")
    apply_url: Optional[str] = Field(None, description="Direct application link")
    posted_text: Optional[str] = Field(
        None, description="Posted date as scraped: ISO-8601 or a relative phrase"
    )

    @field_validator("title", "company")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Reject empty or whitespace-only values."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("location", "description", "url", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("external_id", "apply_url", "posted_text")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None


class JobPosting(BaseModel):
    """Normalized job posting.

    Immutable once built; filters and the scorer only read it. ``posted_date``
    is always an absolute UTC timestamp, even when the provider only gave a
    relative phrase.
    """

    id: str = Field(..., description="Stable posting identifier")
    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    location: str = Field("", description="Free-text location")
    description: str = Field("", description="Plain-text description")
    requirements: Tuple[str, ...] = Field(
        default=(), description="Requirement phrases extracted from the description"
    )
    posted_date: datetime = Field(..., description="When the posting went up (UTC)")
    url: str = Field("", description="Link to the listing")
    apply_url: str = Field("", description="Application link; defaults to url")
    source: str = Field(..., description="Provider tag, e.g. linkedin")

    model_config = {
        "frozen": True,
        "json_schema_extra": {"example": {
            "id": "4b1f0c2e9d",
            "title": "Senior Project Manager",
            "company": "Toyota",
            "location": "Plano, TX",
            "description": "PMP required, Agile, Scrum Master, 5+ years experience...",
            "requirements": ["5+ years experience", "PMP"],
            "posted_date": "2025-11-01T12:00:00Z",
            "url": "https://www.linkedin.com/jobs/view/3791",
            "apply_url": "https://careers.toyota.com/apply/3791",
            "source": "linkedin",
        }},
    }

    @field_validator("posted_date")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @model_validator(mode="before")
    @classmethod
    def default_apply_url(cls, data):
        if isinstance(data, dict) and not data.get("apply_url"):
            data = {**data, "apply_url": data.get("url") or ""}
        return data


class ResumeData(BaseModel):
    """Everything the scorer needs to know about one resume."""

    text: str = Field("", description="Full plain text of the resume")
    skills: Tuple[str, ...] = Field(default=(), description="Recognised skills")
    experience: Tuple[str, ...] = Field(default=(), description="Experience phrases, e.g. '5 years of experience'")
    education: Tuple[str, ...] = Field(default=(), description="Education markers found")
    job_title: Optional[str] = Field(None, description="Current or target role, if detected")
    job_keywords: Tuple[str, ...] = Field(default=(), description="Coarse domain tags")

    model_config = {"frozen": True}

    @field_validator("text", mode="before")
    @classmethod
    def none_text(cls, v):
        return "" if v is None else v


class ApplicationRecord(BaseModel):
    """A posting the user marked as applied."""

    job_id: str = Field(..., description="JobPosting.id")
    job_title: str = Field(..., description="Title at the time of applying")
    company: str = Field(..., description="Company at the time of applying")
    applied_at: datetime = Field(..., description="When the application was recorded (UTC)")
    apply_url: str = Field("", description="Link used to apply")

    @field_validator("applied_at")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @classmethod
    def for_posting(cls, posting: JobPosting, applied_at: datetime) -> "ApplicationRecord":
        return cls(
            job_id=posting.id,
            job_title=posting.title,
            company=posting.company,
            applied_at=applied_at,
            apply_url=posting.apply_url,
        )
