"""Domain models for the job match assistant."""

from .models import ApplicationRecord, JobPosting, RawPosting, ResumeData

__all__ = ["ApplicationRecord", "JobPosting", "RawPosting", "ResumeData"]
