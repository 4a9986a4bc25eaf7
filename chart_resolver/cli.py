"""
Command-line interface for chart-resolver.

This module implements the CLI using Click; rich-click is used for the
help and error colors.

Commands:
    chart-resolver resolve <entries.yaml>   Resolve every entry of a chart
    chart-resolver query <entries.yaml>     Print the search queries only
    chart-resolver --version                Show version

Usage:
    # Resolve a chart with the settings from ./config.yaml
    chart-resolver resolve charts/2001.yaml

    # Parallel tier searches, stricter threshold, known fixes applied
    chart-resolver resolve charts/2003.yaml --concurrent --min-score 25 --normalize

    # Inspect the cascade without contacting Spotify
    chart-resolver query charts/2001.yaml

Configuration:
    `resolve` requires a config.yaml file (current directory or --config)
    with the Spotify API credentials and the output directory.

Exit Codes:
    0    success
    1    configuration error
    2    entries file error
    3    Spotify error
    4    other chart-resolver error
    130  interrupted
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "chart-resolver resolve": [
        {
            "name": "Matching Options",
            "options": ["--min-score", "--concurrent", "--normalize"],
        },
        {
            "name": "Output Options",
            "options": ["--config", "--no-report", "--verbose"],
        },
    ],
}

from chart_resolver import __version__
from chart_resolver.catalog import SpotifyCatalogClient
from chart_resolver.chart import (
    ChartInfo,
    apply_fixes,
    format_match_table,
    load_entries,
    write_match_report,
)
from chart_resolver.core import (
    CatalogError,
    ChartResolverError,
    Config,
    ConfigError,
    EntryError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from chart_resolver.core.progress import ResolvingProgressBar
from chart_resolver.matching import ChartResolver, MatchResult, QueryCascadeGenerator

logger = get_logger(__name__)


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """
    chart-resolver: Resolve yearly chart entries to Spotify tracks.

    \b
    BASIC USAGE:
        chart-resolver resolve charts/2001.yaml     # Resolve a chart
        chart-resolver query charts/2001.yaml       # Show search queries
    """
    if version:
        click.echo(f"chart-resolver {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


@cli.command()
@click.argument(
    "entries_file",
    type=click.Path(path_type=Path),
    metavar="<entries.yaml>"
)
@click.option(
    "--config", "config_path",
    type=click.Path(path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./config.yaml)"
)
@click.option(
    "--min-score",
    type=float,
    default=None,
    help="Override the acceptance threshold"
)
@click.option(
    "--concurrent/--sequential",
    default=None,
    help="Search the six query tiers of an entry in parallel"
)
@click.option(
    "--normalize/--no-normalize",
    default=None,
    help="Apply known fixes to scraped entries"
)
@click.option(
    "--no-report",
    is_flag=True,
    help="Do not write the markdown match table"
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show debug output on the console"
)
def resolve(
    entries_file: Path,
    config_path: Optional[Path],
    min_score: Optional[float],
    concurrent: Optional[bool],
    normalize: Optional[bool],
    no_report: bool,
    verbose: bool
) -> None:
    """
    Resolve every entry of a chart to its best Spotify track.
    """
    try:
        config = _load_configuration(config_path, min_score, concurrent, normalize)

        setup_logging(config.output.directory, verbose=verbose)
        logger.info("chart-resolver starting")

        chart = load_entries(entries_file)
        client = SpotifyCatalogClient.from_config(config.spotify)
        resolver = ChartResolver(client, config.matching)

        with ResolvingProgressBar(
            total=len(chart.entries),
            description=f"Resolving {chart.year}"
        ) as progress_bar:
            results = resolver.resolve_chart(chart, progress_bar=progress_bar)

        if config.matching.normalize_entries:
            chart = apply_fixes(chart)

        if not no_report:
            table = format_match_table(chart, results)
            report = write_match_report(chart, table, config.output.reports_directory)
            click.echo(f"Match report written to {report}")

        _print_summary(chart, results)
        logger.info("chart-resolver completed successfully")

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    except EntryError as e:
        click.echo(f"Entries error: {e.message}", err=True)
        logger.error(f"Entries error: {e.message}")
        sys.exit(2)

    except CatalogError as e:
        click.echo(f"Spotify error: {e.message}", err=True)
        if e.is_auth_error:
            click.echo("Check your client_id and client_secret in config.yaml", err=True)
        elif e.is_rate_limit:
            click.echo("Spotify rate limit reached, try again later", err=True)
        logger.error(f"Spotify error: {e.message}", exc_info=True)
        sys.exit(3)

    except ChartResolverError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Error: {e.message}", exc_info=True)
        sys.exit(4)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        sys.exit(130)

    finally:
        shutdown_logging()


@cli.command()
@click.argument(
    "entries_file",
    type=click.Path(path_type=Path),
    metavar="<entries.yaml>"
)
@click.option(
    "--normalize/--no-normalize",
    default=False,
    help="Apply known fixes to scraped entries"
)
def query(entries_file: Path, normalize: bool) -> None:
    """
    Print the six search queries of every chart entry.

    Nothing is sent to Spotify; no configuration is needed.
    """
    try:
        chart = load_entries(entries_file)
    except EntryError as e:
        click.echo(f"Entries error: {e.message}", err=True)
        sys.exit(2)

    if normalize:
        chart = apply_fixes(chart)

    generator = QueryCascadeGenerator()
    for entry in chart.entries:
        click.echo(f"#{entry.position} {entry.short_description}")
        for tier, search_query in generator.build_cascade(entry):
            click.echo(f"  {tier.name:<36} {search_query}")


def _load_configuration(
    config_path: Optional[Path],
    min_score: Optional[float],
    concurrent: Optional[bool],
    normalize: Optional[bool]
) -> Config:
    """
    Load config.yaml and apply command-line overrides.

    Raises:
        ConfigError: If configuration is invalid or missing.
    """
    config = load_config(config_path)

    overrides = {}
    if min_score is not None:
        overrides["min_score"] = min_score
    if concurrent is not None:
        overrides["concurrent_tiers"] = concurrent
    if normalize is not None:
        overrides["normalize_entries"] = normalize

    if overrides:
        config = replace(config, matching=replace(config.matching, **overrides))
    return config


def _print_summary(chart: ChartInfo, results: list[MatchResult]) -> None:
    """
    Log the match statistics of a resolved chart.
    """
    matched = [r for r in results if r.matched]
    review = [r for r in matched if r.has_close_alternatives]

    logger.info("=" * 60)
    logger.info(f"CHART {chart.year}")
    logger.info("=" * 60)
    logger.info(f"Entries:             {len(results)}")
    logger.info(f"Matched:             {len(matched)}")
    logger.info(f"No match:            {len(results) - len(matched)}")
    logger.info(f"Close alternatives:  {len(review)}")
    logger.info("=" * 60)


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `chart-resolver` from the command
    line. It invokes the Click CLI group.
    """
    cli()


if __name__ == "__main__":
    main()
