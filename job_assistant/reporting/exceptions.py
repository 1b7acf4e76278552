"""Reporting exceptions."""


class ReportRenderError(Exception):
    """A report template failed to load or render."""

    pass
