"""
Core module for chart-resolver.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with multiple outputs
    - progress: Progress bar for chart resolution

Usage:
    from chart_resolver.core import (
        Config, load_config,
        setup_logging, get_logger,
        ChartResolverError, ConfigError, CatalogError
    )
"""

from chart_resolver.core.config import (
    Config,
    MatchingConfig,
    OutputConfig,
    SpotifyConfig,
    load_config,
)
from chart_resolver.core.exceptions import (
    CatalogError,
    ChartResolverError,
    ConfigError,
    EntryError,
)
from chart_resolver.core.logger import (
    get_logger,
    log_match_review,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "SpotifyConfig",
    "MatchingConfig",
    "OutputConfig",
    "load_config",
    # Exceptions
    "ChartResolverError",
    "ConfigError",
    "CatalogError",
    "EntryError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_match_review",
    "shutdown_logging",
]
