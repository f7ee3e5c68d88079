"""
Configuration settings for osmshapes
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class APIConfig:
    """Overpass API endpoint and request settings"""
    # Options: overpass.private.coffee, overpass-api.de, lz4.overpass-api.de
    overpass_url: str = "https://overpass.private.coffee/api/interpreter"
    overpass_timeout: int = 90

    # Request settings
    max_retries: int = 3
    retry_delay: float = 5.0
    min_request_interval: float = 2.0

    # User agent for API requests
    user_agent: str = "osmshapes/1.0"


@dataclass
class ParserConfig:
    """Element parsing configuration"""
    # Tag used to partition open ways before coalescing (None disables grouping)
    group_by_tag: Optional[str] = None

    # Route relations with more way members than this get a performance warning
    route_member_warning_threshold: int = 100

    # Default ordering for CLI output
    sort_by: str = "nodes-desc"

    # API config
    api: APIConfig = field(default_factory=APIConfig)


# Global config instance
config = ParserConfig()


def get_config() -> ParserConfig:
    """Get global configuration"""
    return config


def validate_config(config: ParserConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.route_member_warning_threshold is None:
        errors.append("route_member_warning_threshold is required in config but not set")
    elif config.route_member_warning_threshold < 1:
        errors.append(
            f"route_member_warning_threshold must be positive, got {config.route_member_warning_threshold}"
        )

    if config.group_by_tag is not None and not config.group_by_tag.strip():
        errors.append("group_by_tag must be a non-empty tag key or None")

    if config.api is None:
        errors.append("api configuration is required but not set")
    else:
        if not config.api.overpass_url:
            errors.append("api.overpass_url is required but not set")
        if config.api.overpass_timeout is None or config.api.overpass_timeout <= 0:
            errors.append(f"api.overpass_timeout must be positive, got {config.api.overpass_timeout}")
        if config.api.max_retries is None or config.api.max_retries < 1:
            errors.append(f"api.max_retries must be at least 1, got {config.api.max_retries}")
        if config.api.retry_delay is None or config.api.retry_delay < 0:
            errors.append(f"api.retry_delay must not be negative, got {config.api.retry_delay}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
