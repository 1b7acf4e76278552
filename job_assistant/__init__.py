"""Job match assistant: search postings, filter them and score them against a resume."""

__version__ = "0.1.0"
