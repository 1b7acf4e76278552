"""Plain-text report rendering using Jinja2."""

from typing import Dict, Iterable, Optional, Set

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from job_assistant.domain.models import ResumeData
from job_assistant.logging import get_logger
from job_assistant.matching.models import JobMatch
from job_assistant.pipeline.models import SearchResult

from .context import build_match_context, build_search_context
from .exceptions import ReportRenderError

logger = get_logger(__name__, component="reporting")


class ReportRenderer:
    """Renders the search and match reports printed by the CLI.

    Templates live in the job_assistant.reporting package and are cached
    by the Jinja2 environment after first use. Missing variables raise
    instead of rendering blank.
    """

    def __init__(
        self,
        template_dir: str = "templates",
        search_template: str = "search_report.txt.j2",
        match_template: str = "match_report.txt.j2",
    ):
        self.search_template_name = search_template
        self.match_template_name = match_template
        self.env = Environment(
            loader=PackageLoader("job_assistant.reporting", template_dir),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_search_report(self, result: SearchResult, applied_ids: Optional[Set[str]] = None) -> str:
        return self._render(self.search_template_name, build_search_context(result, applied_ids))

    def render_match_report(
        self,
        matches: Iterable[JobMatch],
        resume: ResumeData,
        applied_ids: Optional[Set[str]] = None,
        limit: Optional[int] = None,
    ) -> str:
        return self._render(
            self.match_template_name, build_match_context(matches, resume, applied_ids, limit)
        )

    def _render(self, template_name: str, context: Dict) -> str:
        """Render one template.

        Raises:
            ReportRenderError: If the template is missing or rendering fails
        """
        try:
            return self.env.get_template(template_name).render(context).rstrip() + "\n"
        except TemplateError as e:
            logger.error(
                f"Failed to render {template_name}: {e}",
                extra={"event": "report.render_failed", "template": template_name, "error": str(e)},
            )
            raise ReportRenderError(f"Failed to render {template_name}: {e}") from e
