"""
Configuration management for chart-resolver.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - Spotify API credentials and search options (market, limit, timeouts)
    - Matching options (acceptance threshold, concurrency, diagnostics)
    - Output directory for logs and match reports

Configuration File Location:
    The config.yaml file is looked up in the current working directory
    unless an explicit path is given.

Example config.yaml:
    spotify:
      client_id: "your_client_id_here"
      client_secret: "your_client_secret_here"
      market: "CH"
      search_limit: 20

    matching:
      min_score: 22.0
      concurrent_tiers: false
      normalize_entries: false

    output:
      directory: "~/chart-resolver"

The resulting Config object is passed explicitly to the components that
need it. There is no module-level configuration state.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from chart_resolver.core.exceptions import ConfigError


# Default configuration file name (always in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_MARKET = "CH"
DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_LIMIT = 50
DEFAULT_REQUESTS_TIMEOUT = 10.0
DEFAULT_RETRIES = 3

DEFAULT_MIN_SCORE = 22.0
DEFAULT_TIER_WORKERS = 6
DEFAULT_DIAGNOSTICS_COUNT = 5
DEFAULT_CLOSE_MATCH_THRESHOLD = 2.0


@dataclass(frozen=True)
class SpotifyConfig:
    """
    Spotify API credentials and search options.

    Attributes:
        client_id: The Spotify application client ID.
        client_secret: The Spotify application client secret.
        market: ISO 3166-1 alpha-2 country code used for every search.
        search_limit: Maximum number of tracks requested per search (1-50).
        requests_timeout: HTTP timeout in seconds for each search call.
        retries: Number of retries spotipy performs on 429/5xx responses.
    """
    client_id: str
    client_secret: str
    market: str = DEFAULT_MARKET
    search_limit: int = DEFAULT_SEARCH_LIMIT
    requests_timeout: float = DEFAULT_REQUESTS_TIMEOUT
    retries: int = DEFAULT_RETRIES


@dataclass(frozen=True)
class MatchingConfig:
    """
    Matching engine options.

    Attributes:
        min_score: Acceptance threshold for the aggregate score.
        concurrent_tiers: Issue the six tier searches of one entry in parallel.
                          Pool order is the same either way.
        tier_workers: Thread count used when concurrent_tiers is enabled.
        diagnostics_count: Number of top ratings kept when an entry has no match.
        close_match_threshold: Score distance under which accepted runners-up
                               are reported as close alternatives.
        normalize_entries: Apply the known entry fixes before searching.
    """
    min_score: float = DEFAULT_MIN_SCORE
    concurrent_tiers: bool = False
    tier_workers: int = DEFAULT_TIER_WORKERS
    diagnostics_count: int = DEFAULT_DIAGNOSTICS_COUNT
    close_match_threshold: float = DEFAULT_CLOSE_MATCH_THRESHOLD
    normalize_entries: bool = False


@dataclass(frozen=True)
class OutputConfig:
    """
    Output directory configuration.

    Attributes:
        directory: Absolute path where logs/ and matching-results/ are written.
                   Path expansion is performed (~ is expanded to home directory).
    """
    directory: Path

    @property
    def reports_directory(self) -> Path:
        """Directory holding the per-year markdown match tables."""
        return self.directory / "matching-results"


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    This is the main configuration object that aggregates all configuration
    sections. It is created by load_config() and should be treated as
    immutable (frozen dataclass).

    Attributes:
        spotify: Spotify credentials and search options.
        matching: Matching engine options.
        output: Output directory settings.
    """
    spotify: SpotifyConfig
    matching: MatchingConfig
    output: OutputConfig


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If the config file is not found, has invalid YAML syntax,
                     is missing required fields, or contains invalid values.

    Behavior:
        1. Locate config file (explicit path or CWD/config.yaml)
        2. Read and parse YAML content
        3. Validate structure (required sections exist)
        4. Parse spotify, matching and output sections with defaults
        5. Create and return frozen Config object
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    _validate_config(raw_config)

    return Config(
        spotify=_parse_spotify_config(raw_config["spotify"]),
        matching=_parse_matching_config(raw_config.get("matching")),
        output=_parse_output_config(raw_config["output"])
    )


def _validate_config(raw_config: dict[str, Any]) -> None:
    """
    Validate the raw configuration dictionary structure.

    Raises:
        ConfigError: If a required section is missing or not a mapping.
    """
    required_sections = ["spotify", "output"]

    for section in required_sections:
        if section not in raw_config:
            raise ConfigError(
                f"Missing required section: '{section}'",
                details={"missing_section": section}
            )

        if not isinstance(raw_config[section], dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )

    matching = raw_config.get("matching")
    if matching is not None and not isinstance(matching, dict):
        raise ConfigError(
            "Section 'matching' must be a dictionary",
            details={"section": "matching"}
        )


def _require_string(section: dict[str, Any], key: str, field: str) -> str:
    value = section.get(key, "")
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(
            f"'{field}' must be a non-empty string",
            details={"field": field}
        )
    return value.strip()


def _optional_int(
    section: dict[str, Any],
    key: str,
    field: str,
    default: int,
    minimum: int,
    maximum: int | None = None
) -> int:
    value = section.get(key)
    if value is None:
        return default
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            f"'{field}' must be an integer",
            details={"field": field, "value": value}
        )
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f">= {minimum}" if maximum is None else f"between {minimum} and {maximum}"
        raise ConfigError(
            f"'{field}' must be {bounds}",
            details={"field": field, "value": value}
        )
    return value


def _optional_number(
    section: dict[str, Any],
    key: str,
    field: str,
    default: float,
    minimum: float | None = None,
    exclusive_minimum: bool = False
) -> float:
    value = section.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(
            f"'{field}' must be a number",
            details={"field": field, "value": value}
        )
    if minimum is not None:
        too_small = value <= minimum if exclusive_minimum else value < minimum
        if too_small:
            relation = ">" if exclusive_minimum else ">="
            raise ConfigError(
                f"'{field}' must be {relation} {minimum}",
                details={"field": field, "value": value}
            )
    return float(value)


def _optional_bool(section: dict[str, Any], key: str, field: str, default: bool) -> bool:
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(
            f"'{field}' must be true or false",
            details={"field": field, "value": value}
        )
    return value


def _parse_spotify_config(spotify_section: dict[str, Any]) -> SpotifyConfig:
    """
    Parse and validate the Spotify configuration section.

    Raises:
        ConfigError: If credentials are missing or search options are invalid.
    """
    client_id = _require_string(spotify_section, "client_id", "spotify.client_id")
    client_secret = _require_string(spotify_section, "client_secret", "spotify.client_secret")

    market = DEFAULT_MARKET
    if spotify_section.get("market") is not None:
        market = _require_string(spotify_section, "market", "spotify.market").upper()
        if len(market) != 2 or not market.isalpha():
            raise ConfigError(
                "'spotify.market' must be a two-letter country code",
                details={"field": "spotify.market", "value": market}
            )

    return SpotifyConfig(
        client_id=client_id,
        client_secret=client_secret,
        market=market,
        search_limit=_optional_int(
            spotify_section, "search_limit", "spotify.search_limit",
            DEFAULT_SEARCH_LIMIT, 1, MAX_SEARCH_LIMIT
        ),
        requests_timeout=_optional_number(
            spotify_section, "requests_timeout", "spotify.requests_timeout",
            DEFAULT_REQUESTS_TIMEOUT, 0, exclusive_minimum=True
        ),
        retries=_optional_int(
            spotify_section, "retries", "spotify.retries", DEFAULT_RETRIES, 0
        )
    )


def _parse_matching_config(matching_section: dict[str, Any] | None) -> MatchingConfig:
    """
    Parse and validate the matching configuration section.

    Applies defaults if section is missing or fields are not specified.

    Raises:
        ConfigError: If a value has the wrong type or is out of range.
    """
    if matching_section is None:
        return MatchingConfig()

    return MatchingConfig(
        min_score=_optional_number(
            matching_section, "min_score", "matching.min_score", DEFAULT_MIN_SCORE
        ),
        concurrent_tiers=_optional_bool(
            matching_section, "concurrent_tiers", "matching.concurrent_tiers", False
        ),
        tier_workers=_optional_int(
            matching_section, "tier_workers", "matching.tier_workers",
            DEFAULT_TIER_WORKERS, 1, DEFAULT_TIER_WORKERS
        ),
        diagnostics_count=_optional_int(
            matching_section, "diagnostics_count", "matching.diagnostics_count",
            DEFAULT_DIAGNOSTICS_COUNT, 1
        ),
        close_match_threshold=_optional_number(
            matching_section, "close_match_threshold", "matching.close_match_threshold",
            DEFAULT_CLOSE_MATCH_THRESHOLD, 0
        ),
        normalize_entries=_optional_bool(
            matching_section, "normalize_entries", "matching.normalize_entries", False
        )
    )


def _parse_output_config(output_section: dict[str, Any]) -> OutputConfig:
    """
    Parse and validate the output configuration section.

    Expands ~ to home directory and converts to absolute Path.
    Does NOT create the directory (that happens when logging is set up).

    Raises:
        ConfigError: If directory is missing or empty.
    """
    directory = _require_string(output_section, "directory", "output.directory")
    return OutputConfig(directory=Path(directory).expanduser().resolve())
