"""Integration tests for configuration module."""

import warnings
from pathlib import Path

import pytest

from job_assistant.config.duration import DurationParseError, parse_duration, validate_duration_range
from job_assistant.config.environment import DEFAULT_DATABASE_URL, load_environment_config
from job_assistant.config.exceptions import ConfigurationError
from job_assistant.config.loader import load_config, parse_config_dict
from job_assistant.config.models import AppConfig, ScoringPolicy, SourceType
from job_assistant.config.validators import check_for_warnings

MINIMAL_CONFIG = """
sources:
  - name: LinkedIn
    type: linkedin
"""

FULL_CONFIG = """
sources:
  - name: LinkedIn
    type: linkedin
  - name: Google Jobs
    type: google_jobs
    actor_id: me/google-jobs
search:
  default_query: program manager
  location: Remote
  default_date_range_days: 14
eligibility:
  salary_floor: 120
  require_target_role: true
scoring:
  apply_threshold: 50
cache:
  ttl: 12h
logging:
  level: DEBUG
  format: json
advanced:
  source_timeout: 60
"""


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock required environment variables for testing."""
    monkeypatch.setenv("APIFY_API_TOKEN", "apify_api_test")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a temporary config file."""

    def _write(text: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# ============================================================================
# Loading
# ============================================================================


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_full_config(self, mock_env_vars, write_config):
        """Test loading a configuration that sets every section."""
        app_config, env_config = load_config(write_config(FULL_CONFIG))

        assert [s.type for s in app_config.sources] == ["linkedin", "google_jobs"]
        assert app_config.sources[0].actor_id == "curious_coder/linkedin-jobs-scraper"
        assert app_config.sources[1].actor_id == "me/google-jobs"
        assert app_config.search.default_query == "program manager"
        assert app_config.search.default_date_range_days == 14
        assert app_config.eligibility.salary_floor == 120
        assert app_config.eligibility.require_target_role is True
        assert app_config.scoring.apply_threshold == 50
        assert app_config.cache.ttl_seconds == 12 * 3600
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert app_config.advanced.source_timeout == 60
        assert env_config.apify_api_token == "apify_api_test"

    def test_load_minimal_config(self, mock_env_vars, write_config):
        """Test loading a minimal configuration with defaults."""
        app_config, env_config = load_config(write_config(MINIMAL_CONFIG))

        assert app_config.search.default_query == "project manager"
        assert app_config.search.allowed_date_ranges == [1, 7, 14, 30]
        assert app_config.eligibility.salary_floor == 100
        assert app_config.scoring == ScoringPolicy()
        assert app_config.cache.ttl_seconds == 86400
        assert app_config.logging.level == "INFO"
        assert env_config.database_url == DEFAULT_DATABASE_URL
        assert env_config.environment == "local"

    def test_config_file_not_found(self, mock_env_vars):
        """Test error when config file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))
        assert "not found" in exc_info.value.message

    def test_invalid_yaml(self, mock_env_vars, write_config):
        """Test error on malformed YAML."""
        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_config(write_config("sources: [unclosed"))

    def test_empty_file(self, mock_env_vars, write_config):
        """Test error on an empty file."""
        with pytest.raises(ConfigurationError, match="empty"):
            load_config(write_config(""))

    def test_missing_token(self, monkeypatch, write_config):
        """Test that the token is required by default."""
        monkeypatch.delenv("APIFY_API_TOKEN", raising=False)
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(write_config(MINIMAL_CONFIG))
        assert "Missing required environment variable: APIFY_API_TOKEN" in exc_info.value.errors

    def test_token_optional(self, monkeypatch, write_config):
        """Test loading without a token when none is required."""
        monkeypatch.delenv("APIFY_API_TOKEN", raising=False)
        _, env_config = load_config(write_config(MINIMAL_CONFIG), require_token=False)
        assert env_config.apify_api_token is None


# ============================================================================
# Validation
# ============================================================================


class TestConfigurationValidation:
    """Test schema validation errors."""

    def test_unknown_source_type(self):
        """Test that unsupported providers are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config_dict({"sources": [{"name": "Indeed", "type": "indeed"}]})
        assert any("sources -> 0 -> type" in error for error in exc_info.value.errors)

    def test_missing_sources(self):
        """Test that sources are required."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config_dict({"search": {"default_query": "pm"}})
        assert "Missing required field: sources" in exc_info.value.errors

    def test_duplicate_source_names(self):
        """Test that source names must be unique."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config_dict({"sources": [
                {"name": "LinkedIn", "type": "linkedin"},
                {"name": "linkedin", "type": "google_jobs"},
            ]})
        assert any("Duplicate source name" in error for error in exc_info.value.errors)

    def test_all_sources_disabled(self):
        """Test that at least one source must be enabled."""
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            with pytest.raises(ConfigurationError):
                parse_config_dict({"sources": [{"name": "LinkedIn", "type": "linkedin", "enabled": False}]})

    def test_default_range_must_be_allowed(self):
        """Test that the default window must be an allowed one."""
        with pytest.raises(ConfigurationError):
            parse_config_dict({
                "sources": [{"name": "LinkedIn", "type": "linkedin"}],
                "search": {"default_date_range_days": 3},
            })

    def test_cache_ttl_bounds(self):
        """Test that cache TTLs outside 1 minute to 7 days are rejected."""
        for ttl in ("30s", "8d", "soon"):
            with pytest.raises(ConfigurationError):
                parse_config_dict({"sources": [{"name": "LinkedIn", "type": "linkedin"}], "cache": {"ttl": ttl}})

    def test_not_a_mapping(self):
        """Test that the root must be a mapping."""
        with pytest.raises(ConfigurationError, match="mapping"):
            parse_config_dict(["sources"])

    def test_render_lists_errors_and_suggestions(self):
        """Test the user-facing error text."""
        error = ConfigurationError("Bad config", errors=["first"], suggestions=["fix it"])
        assert str(error) == "Bad config\n\nValidation Errors:\n  1. first\n\nSuggestions:\n  - fix it"


class TestConfigurationWarnings:
    """Test soft warnings."""

    def test_disabled_source_warning(self):
        """Test that disabled sources produce a warning."""
        config = {"sources": [
            {"name": "LinkedIn", "type": "linkedin"},
            {"name": "Google", "type": "google_jobs", "enabled": False},
        ]}
        with pytest.warns(UserWarning, match="Google"):
            app_config = parse_config_dict(config)
        assert isinstance(app_config, AppConfig)

    def test_wait_not_below_deadline(self):
        """Test the actor wait versus deadline warning."""
        messages = check_for_warnings({"advanced": {"actor_wait_seconds": 60, "source_timeout": 60}})
        assert any("actor_wait_seconds" in message for message in messages)

    def test_low_threshold(self):
        """Test the low apply threshold warning."""
        assert check_for_warnings({"scoring": {"apply_threshold": 10}})

    def test_clean_config(self):
        """Test that a default config has no warnings."""
        assert check_for_warnings({"sources": [{"name": "LinkedIn", "type": "linkedin"}]}) == []


# ============================================================================
# Environment and durations
# ============================================================================


class TestEnvironmentConfig:
    """Test environment variable loading."""

    def test_values_read(self, monkeypatch):
        """Test that every variable is picked up."""
        monkeypatch.setenv("APIFY_API_TOKEN", " apify_api_test ")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp/test.db")
        monkeypatch.setenv("ENVIRONMENT", "ci")
        env_config = load_environment_config()
        assert env_config.apify_api_token == "apify_api_test"
        assert env_config.log_level == "DEBUG"
        assert env_config.database_url == "sqlite:///tmp/test.db"
        assert env_config.environment == "ci"

    def test_invalid_log_level(self, monkeypatch):
        """Test that unknown log levels are rejected."""
        monkeypatch.setenv("APIFY_API_TOKEN", "t")
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")
        with pytest.raises(ConfigurationError):
            load_environment_config()

    def test_repr_hides_token(self, monkeypatch):
        """Test that the token never appears in repr."""
        monkeypatch.setenv("APIFY_API_TOKEN", "apify_api_secret")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert "apify_api_secret" not in repr(load_environment_config())


class TestDurations:
    """Test duration parsing."""

    @pytest.mark.parametrize(
        "text,seconds",
        [("24h", 86400), ("90m", 5400), ("1d12h", 129600), ("PT15M", 900), ("P1D", 86400), ("1h 30m", 5400)],
    )
    def test_parse(self, text, seconds):
        """Test human and ISO-8601 formats."""
        assert parse_duration(text) == seconds

    @pytest.mark.parametrize("text", ["", "0h", "abc", "24x", "P"])
    def test_invalid(self, text):
        """Test rejected duration strings."""
        with pytest.raises(DurationParseError):
            parse_duration(text)

    def test_range(self):
        """Test range validation messages."""
        with pytest.raises(DurationParseError, match="too short"):
            validate_duration_range(30, min_seconds=60, max_seconds=3600)
        validate_duration_range(60, min_seconds=60, max_seconds=3600)


def test_source_type_values():
    """Test the supported provider names."""
    assert {t.value for t in SourceType} == {"linkedin", "google_jobs"}
