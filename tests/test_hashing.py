"""Unit tests for hashing and text utilities."""

import pytest

from job_assistant.utils.hashing import compute_posting_id, dedup_key, hash_string
from job_assistant.utils.text import clean_html, collapse_whitespace, split_words, truncate_text


class TestComputePostingId:
    """Tests for compute_posting_id function."""

    def test_basic(self):
        """Test that ids are 64-character hex digests."""
        posting_id = compute_posting_id("linkedin", "3791")
        assert len(posting_id) == 64
        assert all(c in "0123456789abcdef" for c in posting_id)

    def test_deterministic(self):
        """Test that the same input gives the same id."""
        assert compute_posting_id("linkedin", "3791") == compute_posting_id("linkedin", "3791")

    def test_source_normalized(self):
        """Test that the source tag is case and whitespace insensitive."""
        assert compute_posting_id(" LinkedIn", "3791") == compute_posting_id("linkedin", "3791")

    def test_source_distinguishes(self):
        """Test that the same external id on two providers differs."""
        assert compute_posting_id("linkedin", "3791") != compute_posting_id("google_jobs", "3791")

    def test_fallback_fingerprint(self):
        """Test ids built from title, company and URL when no external id exists."""
        first = compute_posting_id("google_jobs", None, "Project  Manager", "Toyota", "https://x.test/1")
        second = compute_posting_id("google_jobs", "  ", "project manager", "TOYOTA", "https://x.test/1")
        other = compute_posting_id("google_jobs", None, "Project Manager", "Toyota", "https://x.test/2")
        assert first == second
        assert first != other


class TestDedupKey:
    """Tests for dedup_key function."""

    def test_normalizes_case_and_spacing(self):
        """Test that cosmetic differences collapse to one key."""
        assert dedup_key(" Program  Manager", "PepsiCo") == dedup_key("program manager", "pepsico ")

    def test_company_matters(self):
        """Test that the same title at another company is distinct."""
        assert dedup_key("Project Manager", "Toyota") != dedup_key("Project Manager", "Honda")


class TestHashString:
    """Tests for hash_string function."""

    def test_known_digest(self):
        """Test the SHA256 of the empty string."""
        assert hash_string("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_case_sensitive(self):
        """Test that hashing is case sensitive."""
        assert hash_string("PMP") != hash_string("pmp")


class TestTextHelpers:
    """Tests for text cleanup helpers."""

    def test_collapse_whitespace(self):
        """Test stripping and squeezing."""
        assert collapse_whitespace("  Senior \n Project\tManager ") == "Senior Project Manager"
        assert collapse_whitespace(None) == ""

    def test_clean_html(self):
        """Test that block tags become lines and entities are unescaped."""
        raw = "<div><p>Agile &amp; Scrum</p><ul><li>PMP</li><li><b>5+</b> years</li></ul></div>"
        assert clean_html(raw) == "Agile & Scrum\nPMP\n5+ years"

    def test_clean_html_plain_text(self):
        """Test that plain text passes through."""
        assert clean_html("PMP required\n\n\nAgile") == "PMP required\nAgile"
        assert clean_html(None) == ""

    def test_split_words(self):
        """Test splitting on whitespace, hyphens and underscores."""
        assert split_words("cross-functional  team_lead") == ["cross", "functional", "team", "lead"]

    @pytest.mark.parametrize(
        "text,length,expected",
        [
            ("Short", 30, "Short"),
            ("Lead cross-functional delivery teams", 30, "Lead cross-functional..."),
            ("abcdefghijklmnopqrstuvwxyz", 10, "abcdefg..."),
        ],
    )
    def test_truncate_text(self, text, length, expected):
        """Test truncation at a word break where possible."""
        assert truncate_text(text, length) == expected
