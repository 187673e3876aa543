"""
Configuration management for Serenity.

Provides centralized configuration loading, validation, and environment variable overrides.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path


DEFAULT_CONFIG_PATH = "serenity/config/default_config.yaml"


@dataclass
class SourcesConfig:
    """Credentials and endpoints for the upstream content providers."""
    tmdb_api_key: str = ""
    youtube_api_key: str = ""
    yelp_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    youtube_base_url: str = "https://www.googleapis.com/youtube/v3"
    yelp_base_url: str = "https://api.yelp.com/v3"
    timeout_seconds: Optional[float] = 5.0


@dataclass
class RecommendationConfig:
    """Configuration for the recommendation aggregator."""
    default_location: str = "New York, NY"


@dataclass
class LoggingConfig:
    """Configuration for logging parameters."""
    level: str = "INFO"
    format: str = "json"


@dataclass
class VersioningConfig:
    api_version: str = "1.0.0"


@dataclass
class AppConfig:
    """Main application configuration containing all sub-configurations."""
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    recommendation: RecommendationConfig = field(default_factory=RecommendationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    versioning: VersioningConfig = field(default_factory=VersioningConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sources': self.sources.__dict__.copy(),
            'recommendation': self.recommendation.__dict__.copy(),
            'logging': self.logging.__dict__.copy(),
            'versioning': self.versioning.__dict__.copy(),
        }


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigManager:
    """Manages application configuration loading, validation, and environment overrides."""

    def __init__(self):
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> Optional[AppConfig]:
        return self._config

    def load(self, config_path: str) -> AppConfig:
        """
        Load configuration from YAML file with environment variable overrides.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            AppConfig: Loaded and validated configuration

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ConfigValidationError(
                f"Configuration root must be a mapping, got {type(config_data).__name__}"
            )

        config_data = self._apply_env_overrides(config_data)
        config = self._create_config_from_dict(config_data)
        self.validate(config)

        self._config = config
        return config

    def _create_config_from_dict(self, config_data: Dict[str, Any]) -> AppConfig:
        """Create AppConfig from dictionary data."""
        sources_data = config_data.get('sources') or {}
        recommendation_data = config_data.get('recommendation') or {}
        logging_data = config_data.get('logging') or {}
        versioning_data = config_data.get('versioning') or {}

        defaults = SourcesConfig()
        sources_config = SourcesConfig(
            tmdb_api_key=sources_data.get('tmdb_api_key') or defaults.tmdb_api_key,
            youtube_api_key=sources_data.get('youtube_api_key') or defaults.youtube_api_key,
            yelp_api_key=sources_data.get('yelp_api_key') or defaults.yelp_api_key,
            tmdb_base_url=sources_data.get('tmdb_base_url', defaults.tmdb_base_url),
            youtube_base_url=sources_data.get('youtube_base_url', defaults.youtube_base_url),
            yelp_base_url=sources_data.get('yelp_base_url', defaults.yelp_base_url),
            timeout_seconds=self._parse_timeout(
                sources_data.get('timeout_seconds', defaults.timeout_seconds)
            )
        )

        recommendation_config = RecommendationConfig(
            default_location=recommendation_data.get(
                'default_location', RecommendationConfig().default_location
            )
        )

        logging_config = LoggingConfig(
            level=str(logging_data.get('level', LoggingConfig().level)).upper(),
            format=logging_data.get('format', LoggingConfig().format)
        )

        versioning_config = VersioningConfig(
            api_version=str(versioning_data.get('api_version', VersioningConfig().api_version))
        )

        return AppConfig(
            sources=sources_config,
            recommendation=recommendation_config,
            logging=logging_config,
            versioning=versioning_config
        )

    @staticmethod
    def _parse_timeout(value: Any) -> Optional[float]:
        # null or 0 disables the per-source timeout
        if value is None:
            return None
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            raise ConfigValidationError(f"Source timeout must be a number, got {value!r}")
        return timeout if timeout != 0 else None

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration data."""
        env_mappings = {
            'SERENITY_TMDB_API_KEY': ['sources', 'tmdb_api_key'],
            'SERENITY_YOUTUBE_API_KEY': ['sources', 'youtube_api_key'],
            'SERENITY_YELP_API_KEY': ['sources', 'yelp_api_key'],
            'SERENITY_SOURCE_TIMEOUT': ['sources', 'timeout_seconds'],
            'SERENITY_DEFAULT_LOCATION': ['recommendation', 'default_location'],
            'SERENITY_LOG_LEVEL': ['logging', 'level'],
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                current = config_data
                for key in config_path[:-1]:
                    if not isinstance(current.get(key), dict):
                        current[key] = {}
                    current = current[key]
                current[config_path[-1]] = env_value

        return config_data

    def validate(self, config: AppConfig) -> bool:
        """
        Validate configuration values.

        Args:
            config: Configuration to validate

        Returns:
            bool: True if valid

        Raises:
            ConfigValidationError: If validation fails
        """
        errors = []

        timeout = config.sources.timeout_seconds
        if timeout is not None and timeout < 0:
            errors.append("Source timeout_seconds must be positive, 0 or null")

        for name in ('tmdb_base_url', 'youtube_base_url', 'yelp_base_url'):
            if not getattr(config.sources, name):
                errors.append(f"Source {name} cannot be empty")

        if not config.recommendation.default_location or not config.recommendation.default_location.strip():
            errors.append("Recommendation default_location cannot be empty")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if config.logging.level not in valid_log_levels:
            errors.append(f"Logging level must be one of: {valid_log_levels}")

        if config.logging.format not in ['json', 'text']:
            errors.append("Logging format must be 'json' or 'text'")

        if not config.versioning.api_version:
            errors.append("API version cannot be empty")

        if errors:
            raise ConfigValidationError(f"Configuration validation failed: {'; '.join(errors)}")

        return True
