"""
chart-resolver: Resolve yearly chart entries to catalog tracks.

This package takes the entries of a yearly singles chart (title, artists,
year) and finds, for each one, the single best matching track in the
Spotify catalog, or declares "no match" when no candidate is good enough.

Architecture:
    For every chart entry:

    1. Six search queries of decreasing specificity are built
       (tagged title/artist/year down to plain free text)
    2. Each query is searched once; the results are merged, in query
       order and without duplicates, into one candidate pool
    3. Karaoke, instrumental and live recordings are blocked
    4. Every other candidate is scored along eleven additive dimensions
       (title, artists, popularity, pool rank, duration, version, ...)
    5. The best candidate at or above the threshold (22.0) is selected;
       otherwise the entry ends as "no match" with the top candidates
       kept for review

Modules:
    core/       - Configuration, logging, progress bar, exceptions
    catalog/    - Entry/track models and the Spotify search client
    matching/   - Query cascade, aggregation, blocklist, scoring, selection
    chart/      - Entries file, entry fixes, match table report
    cli.py      - Command-line interface

Usage:
    Command Line:
        chart-resolver resolve charts/2001.yaml
        chart-resolver resolve charts/2001.yaml --concurrent --min-score 25
        chart-resolver query charts/2001.yaml

    Python API:
        from chart_resolver.core import load_config, setup_logging
        from chart_resolver.catalog import SpotifyCatalogClient
        from chart_resolver.chart import load_entries
        from chart_resolver.matching import ChartResolver

        config = load_config()
        setup_logging(config.output.directory)

        client = SpotifyCatalogClient.from_config(config.spotify)
        chart = load_entries(Path("charts/2001.yaml"))
        results = ChartResolver(client, config.matching).resolve_chart(chart)

Dependencies:
    - spotipy: Spotify Web API client
    - requests: Transport errors raised through spotipy
    - rich-click: CLI framework with colors
    - rich: Progress bar
    - tqdm: Progress-safe console logging
    - pyyaml: Configuration and entries file parsing
"""

__version__ = "0.1.0"
__author__ = "chart-resolver"
__license__ = "MIT"

# Convenience imports for common usage
from chart_resolver.catalog import CandidateTrack, SourceEntry, SpotifyCatalogClient
from chart_resolver.chart import ChartInfo, load_entries
from chart_resolver.core import (
    CatalogError,
    ChartResolverError,
    Config,
    ConfigError,
    EntryError,
    get_logger,
    load_config,
    setup_logging,
)
from chart_resolver.matching import ChartResolver, MatchResult

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "ChartResolverError",
    "ConfigError",
    "CatalogError",
    "EntryError",
    # Models
    "SourceEntry",
    "CandidateTrack",
    "ChartInfo",
    "MatchResult",
    # Entry points
    "SpotifyCatalogClient",
    "ChartResolver",
    "load_entries",
]
