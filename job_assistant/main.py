"""Command-line entry point for the job match assistant."""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from job_assistant.adapters.exceptions import AdapterConfigurationError
from job_assistant.config.environment import EnvironmentConfig
from job_assistant.config.exceptions import ConfigurationError
from job_assistant.config.loader import load_config
from job_assistant.config.models import AppConfig
from job_assistant.domain.models import ApplicationRecord
from job_assistant.logging import get_logger
from job_assistant.logging.config import configure_logging
from job_assistant.matching.engine import MatchScorer
from job_assistant.persistence.database import close_database, init_database
from job_assistant.persistence.exceptions import PersistenceError
from job_assistant.pipeline import build_orchestrator
from job_assistant.reporting import ReportRenderer
from job_assistant.resume import ResumeError, ResumeParser, read_resume_file
from job_assistant.tracking import ApplicationTracker
from job_assistant.utils.timestamps import format_display_date, utc_now

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_RESUME_ERROR = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str], require_token: bool
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > environment > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path, require_token=require_token)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = str(app_config.logging.level)

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="job-assistant",
        description="Job Match Assistant - search job postings, filter them and rank them against your resume",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search postings and optionally rank them against a resume")
    search.add_argument("--resume", type=Path, help="Resume file (PDF, DOCX or plain text)")
    search.add_argument("--days", type=int, default=None, help="Date range in days (1, 7, 14 or 30)")
    search.add_argument("--title", default=None, help="Role title to search for (overrides the resume's)")
    search.add_argument("--limit", type=int, default=None, help="Show at most this many ranked matches")

    applied = commands.add_parser("applied", help="Track the postings you applied to")
    applied_commands = applied.add_subparsers(dest="applied_command", required=True)
    applied_commands.add_parser("list", help="List applications, most recent first")
    applied_commands.add_parser("stats", help="Application counts for the last week and month")
    mark = applied_commands.add_parser("mark", help="Mark a posting as applied")
    mark.add_argument("job_id", help="Posting id as shown in search output")
    mark.add_argument("--title", default="", help="Job title")
    mark.add_argument("--company", default="", help="Company name")
    mark.add_argument("--url", default="", help="Application link")
    unmark = applied_commands.add_parser("unmark", help="Remove an application record")
    unmark.add_argument("job_id", help="Posting id")

    return parser


def run_search(args: argparse.Namespace, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    """Search, filter and (with a resume) score; prints the reports."""
    resume = None
    if args.resume:
        resume = ResumeParser().parse(read_resume_file(args.resume), job_title=args.title)

    title = args.title or (resume.job_title if resume else None)
    keywords = list(resume.job_keywords) if resume else None

    try:
        orchestrator = build_orchestrator(app_config, env_config.apify_api_token or "")
    except AdapterConfigurationError as e:
        raise ConfigurationError(
            f"Invalid source configuration: {e}",
            suggestions=["Check the sources section of your config file"],
        ) from e

    result = orchestrator.search_postings(
        resume_title=title, resume_keywords=keywords, date_range_days=args.days
    )

    tracker = ApplicationTracker()
    try:
        applied_ids = tracker.applied_job_ids()
        renderer = ReportRenderer()
        sys.stdout.write(renderer.render_search_report(result, applied_ids))

        if resume is not None:
            matches = MatchScorer(app_config.scoring).score_all(resume, result.postings)
            sys.stdout.write("\n")
            sys.stdout.write(renderer.render_match_report(matches, resume, applied_ids, args.limit))
    finally:
        tracker.shutdown()

    return EXIT_OK


def run_applied(args: argparse.Namespace) -> int:
    """Handle the ``applied`` subcommands."""
    with ApplicationTracker() as tracker:
        if args.applied_command == "list":
            records = tracker.list_applications()
            if not records:
                sys.stdout.write("No applications recorded yet.\n")
            for record in records:
                sys.stdout.write(
                    f"{format_display_date(record.applied_at)}  {record.job_title} - {record.company}"
                    f"  [{record.job_id}]  {record.apply_url}\n"
                )
            return EXIT_OK

        if args.applied_command == "stats":
            stats = tracker.stats()
            sys.stdout.write(
                f"Applications: {stats.total} total, {stats.this_week} this week, "
                f"{stats.this_month} this month\n"
            )
            return EXIT_OK

        if args.applied_command == "mark":
            record = ApplicationRecord(
                job_id=args.job_id,
                job_title=args.title,
                company=args.company,
                applied_at=utc_now(),
                apply_url=args.url,
            )
            stored = tracker.record(record).result()
            if stored is None:
                sys.stderr.write(f"Could not record application {args.job_id}\n")
                return EXIT_CONFIG_ERROR
            sys.stdout.write(f"Marked {stored.job_id} as applied on {format_display_date(stored.applied_at)}\n")
            return EXIT_OK

        removed = tracker.remove(args.job_id)
        sys.stdout.write(
            f"Removed application {args.job_id}\n" if removed else f"No application recorded for {args.job_id}\n"
        )
        return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0 on success, 1 on configuration (or storage) errors,
        2 when the resume cannot be read.
    """
    load_dotenv()
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(
            args.config, args.log_level, require_token=args.command == "search"
        )
        configure_logging(
            level=env_config.log_level,
            format_type=str(app_config.logging.format),
            environment=env_config.environment,
        )
        logger.info(
            "Job Match Assistant starting",
            extra={
                "event": "service.starting",
                "command": args.command,
                "log_level": env_config.log_level,
                "enabled_source_count": len(app_config.get_enabled_sources()),
            },
        )

        init_database(env_config.database_url)
        try:
            if args.command == "search":
                exit_code = run_search(args, app_config, env_config)
            else:
                exit_code = run_applied(args)
        finally:
            close_database()

        logger.info(
            "Job Match Assistant finished",
            extra={
                "event": "service.stopping",
                "exit_code": exit_code,
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return exit_code

    except ConfigurationError as e:
        sys.stderr.write(f"Configuration Error: {e}\n")
        logger.error(
            f"Configuration error: {e.message}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return EXIT_CONFIG_ERROR
    except ResumeError as e:
        sys.stderr.write(f"Resume Error: {e}\n")
        logger.error(
            f"Resume error: {e}",
            extra={"event": "resume.error", "error_type": type(e).__name__},
        )
        return EXIT_RESUME_ERROR
    except PersistenceError as e:
        sys.stderr.write(f"Storage Error: {e}\n")
        logger.error(
            f"Storage error: {e}",
            extra={"event": "database.error", "error_type": type(e).__name__},
        )
        return EXIT_CONFIG_ERROR
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted by user\n")
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
