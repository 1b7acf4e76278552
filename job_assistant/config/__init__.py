"""Configuration management for the job match assistant."""

from .duration import DurationParseError, parse_duration
from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config_dict
from .models import (
    AdvancedConfig,
    AppConfig,
    CacheConfig,
    EligibilityConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ScoringPolicy,
    SearchConfig,
    SourceConfig,
    SourceType,
)

__all__ = [
    # Loaders
    "load_config",
    "parse_config_dict",
    "load_environment_config",
    "parse_duration",
    # Models
    "AppConfig",
    "SourceConfig",
    "SearchConfig",
    "EligibilityConfig",
    "ScoringPolicy",
    "CacheConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    # Enums
    "SourceType",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
    "DurationParseError",
]
