"""Plain-text reports for search results and ranked matches."""

from .context import build_match_context, build_search_context
from .exceptions import ReportRenderError
from .renderer import ReportRenderer

__all__ = ["ReportRenderError", "ReportRenderer", "build_match_context", "build_search_context"]
