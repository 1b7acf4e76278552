"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range


class SourceType(str, Enum):
    """Supported posting providers."""

    LINKEDIN = "linkedin"
    GOOGLE_JOBS = "google_jobs"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


DEFAULT_ACTORS = {
    SourceType.LINKEDIN.value: "curious_coder/linkedin-jobs-scraper",
    SourceType.GOOGLE_JOBS.value: "johnvc/Google-Jobs-Scraper",
}


class SourceConfig(BaseModel):
    """One posting source, backed by a hosted scraping actor."""

    name: str = Field(..., min_length=1, description="Human-readable source name")
    type: SourceType = Field(..., description="Provider type (linkedin, google_jobs)")
    actor_id: Optional[str] = Field(
        None, description="Actor that scrapes this provider; defaults per type"
    )
    enabled: bool = Field(True, description="Whether to query this source")

    model_config = {"use_enum_values": True}

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @model_validator(mode="after")
    def default_actor(self):
        if not self.actor_id or not self.actor_id.strip():
            self.actor_id = DEFAULT_ACTORS[self.type]
        else:
            self.actor_id = self.actor_id.strip()
        return self


class SearchConfig(BaseModel):
    """How search queries and date windows are built."""

    default_query: str = Field(
        "project manager", min_length=1, description="Query for the target role category"
    )
    location: str = Field("United States", description="Location passed to every source")
    default_date_range_days: int = Field(7, ge=1, description="Window used when none is given")
    allowed_date_ranges: List[int] = Field(
        default_factory=lambda: [1, 7, 14, 30],
        description="Date windows a caller may request",
    )
    max_keyword_queries: int = Field(
        0, ge=0, le=5, description="Extra queries built from resume domain keywords"
    )

    @field_validator("default_query", "location")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("allowed_date_ranges")
    @classmethod
    def normalize_ranges(cls, v: List[int]) -> List[int]:
        if not v:
            raise ValueError("allowed_date_ranges must list at least one window")
        if any(days < 1 for days in v):
            raise ValueError("Date windows must be at least 1 day")
        return sorted(set(v))

    @model_validator(mode="after")
    def default_range_is_allowed(self):
        if self.default_date_range_days not in self.allowed_date_ranges:
            raise ValueError(
                f"default_date_range_days ({self.default_date_range_days}) must be one of "
                f"{self.allowed_date_ranges}"
            )
        return self


class EligibilityConfig(BaseModel):
    """Business rules a posting must pass before it is scored."""

    salary_floor: float = Field(
        100, ge=0, description="Minimum salary in thousands; only applied when a salary is stated"
    )
    require_target_role: bool = Field(
        False, description="Keep only postings whose title is in the target role family"
    )
    require_certification: bool = Field(
        False, description="Keep only postings that require the target role's certification"
    )
    target_role: str = Field("project manager", description="Role family for the optional filters")

    @field_validator("target_role")
    @classmethod
    def lower_role(cls, v: str) -> str:
        return v.strip().lower()


class ScoringPolicy(BaseModel):
    """Weights and thresholds of the match score.

    Defaults reproduce the tuned policy; every value can be overridden from
    the ``scoring`` section of the config file.
    """

    keyword_ratio_points: float = Field(50, ge=0, description="Points for a full keyword ratio")
    points_per_match: float = Field(3, ge=0, description="Points per matched keyword")
    match_points_cap: float = Field(30, ge=0, description="Cap on per-match points")
    multi_match_bonus: float = Field(10, ge=0, description="Flat bonus once enough keywords match")
    multi_match_min: int = Field(3, ge=1, description="Matches needed for the flat bonus")
    role_points: float = Field(15, ge=0, description="Points for a full role match")
    experience_points: float = Field(10, ge=0, description="Points for a full experience match")
    education_points: float = Field(5, ge=0, description="Points for a full education match")
    target_role_bonus: float = Field(15, ge=0, description="Bonus when the posting is in the target role")
    apply_threshold: int = Field(40, ge=0, le=100, description="Score at or above which to apply")
    bonus_min_matches: int = Field(
        2, ge=0, description="Matches that make a target-role posting an apply regardless of score"
    )
    display_limit: int = Field(15, ge=1, description="Length cap of matched/missing keyword lists")
    target_role: str = Field("project manager", description="Role category that earns the bonus")

    @field_validator("target_role")
    @classmethod
    def lower_role(cls, v: str) -> str:
        return v.strip().lower()


class CacheConfig(BaseModel):
    """Search result cache."""

    enabled: bool = Field(True, description="Reuse search results for identical requests")
    ttl: str = Field("24h", description="Entries older than this are discarded")

    ttl_seconds: Optional[int] = None

    @field_validator("ttl")
    @classmethod
    def validate_ttl(cls, v: str) -> str:
        try:
            validate_duration_range(parse_duration(v), min_seconds=60, max_seconds=7 * 86400, label="Cache TTL")
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def compute_seconds(self):
        self.ttl_seconds = parse_duration(self.ttl)
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="Log output format")

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """Network and concurrency settings."""

    http_request_timeout: int = Field(30, ge=5, le=300, description="Per-request timeout (seconds)")
    source_timeout: int = Field(
        90, ge=10, le=600, description="Deadline for all source calls of one search (seconds)"
    )
    actor_wait_seconds: int = Field(
        45, ge=0, le=60, description="How long to wait for an actor run before fetching partial results"
    )
    max_results_per_query: int = Field(50, ge=1, le=500, description="Items requested per actor run")
    max_jobs_per_source: int = Field(1000, ge=0, description="Cap per source call (0 = unlimited)")
    max_workers: int = Field(8, ge=1, le=32, description="Concurrent source calls")
    user_agent: str = Field("JobMatchAssistant/1.0", min_length=1, description="User-Agent header")

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object."""

    sources: List[SourceConfig] = Field(..., min_length=1, description="Posting sources")
    search: SearchConfig = Field(default_factory=SearchConfig)
    eligibility: EligibilityConfig = Field(default_factory=EligibilityConfig)
    scoring: ScoringPolicy = Field(default_factory=ScoringPolicy)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    advanced: AdvancedConfig = Field(default_factory=AdvancedConfig)

    @model_validator(mode="after")
    def validate_sources(self):
        if not self.get_enabled_sources():
            raise ValueError("At least one source must be enabled. All sources have enabled=false.")

        seen = set()
        for source in self.sources:
            key = source.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate source name: {source.name}")
            seen.add(key)
        return self

    def get_enabled_sources(self) -> List[SourceConfig]:
        return [source for source in self.sources if source.enabled]

    def get_source(self, name: str) -> Optional[SourceConfig]:
        for source in self.sources:
            if source.name.lower() == name.lower():
                return source
        return None
