"""Test helper utilities for Job Match Assistant tests."""

from .fixture_adapter import FailingAdapter, FixtureAdapter, SlowAdapter, load_fixture_postings
from .postings import PM_DESCRIPTION, PM_RESUME_TEXT, REFERENCE_NOW, make_posting, make_resume

__all__ = [
    "FailingAdapter",
    "FixtureAdapter",
    "PM_DESCRIPTION",
    "PM_RESUME_TEXT",
    "REFERENCE_NOW",
    "SlowAdapter",
    "load_fixture_postings",
    "make_posting",
    "make_resume",
]
