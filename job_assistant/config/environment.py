"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_DATABASE_URL = "sqlite:///./data/job_assistant.db"


class EnvironmentConfig:
    """Secrets and deployment settings read from the environment."""

    def __init__(
        self,
        apify_api_token: Optional[str],
        log_level: Optional[str] = None,
        database_url: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.apify_api_token = apify_api_token
        self.log_level = log_level.upper() if log_level else None
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self.environment = environment or "local"

    def __repr__(self) -> str:
        token_state = "set" if self.apify_api_token else "missing"
        return (
            f"EnvironmentConfig(apify_api_token=<{token_state}>, log_level={self.log_level!r}, "
            f"database_url={self.database_url!r}, environment={self.environment!r})"
        )


def load_environment_config(require_token: bool = True) -> EnvironmentConfig:
    """Read and validate environment variables.

    Variables:
    - APIFY_API_TOKEN: token for the scraping platform (required when sources run)
    - LOG_LEVEL: overrides the configured log level
    - DATABASE_URL: application tracker database (default sqlite:///./data/job_assistant.db)
    - ENVIRONMENT: label stamped on log records (default "local")

    Args:
        require_token: Fail when APIFY_API_TOKEN is missing

    Raises:
        ConfigurationError: If a required variable is missing or a value is invalid
    """
    errors = []

    token = (os.getenv("APIFY_API_TOKEN") or "").strip() or None
    log_level = (os.getenv("LOG_LEVEL") or "").strip() or None

    if require_token and not token:
        errors.append("Missing required environment variable: APIFY_API_TOKEN")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Create an Apify API token at https://console.apify.com/account/integrations",
            ],
        )

    return EnvironmentConfig(
        apify_api_token=token,
        log_level=log_level,
        database_url=os.getenv("DATABASE_URL"),
        environment=os.getenv("ENVIRONMENT"),
    )
