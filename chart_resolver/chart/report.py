"""
Match table report for a resolved chart.

The table lists every chart entry next to the catalog track it was
resolved to ("-" when there was no match):

    ========================================================================
    |   # | Charts-Info             | Catalog Match                        |
    ========================================================================
    |   1 | Lady [Modjo]            | Lady [Modjo], Lady (2001-01-01)      |
    ------------------------------------------------------------------------

It is logged and written to <output>/matching-results/<year>.md.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from chart_resolver.chart.entries import ChartInfo
from chart_resolver.core.exceptions import ChartResolverError
from chart_resolver.core.logger import get_logger

if TYPE_CHECKING:
    from chart_resolver.matching.selector import MatchResult


logger = get_logger(__name__)

ENTRY_HEADER = "Charts-Info"
MATCH_HEADER = "Catalog Match"
NO_MATCH = "-"


def format_match_table(chart: ChartInfo, results: list["MatchResult"]) -> str:
    """
    Render the fixed-width match table of a chart.

    Args:
        chart: The resolved chart.
        results: One MatchResult per chart entry, in chart order.

    Returns:
        The table, one line per row, ending with a newline.

    Raises:
        ChartResolverError: If the number of results differs from the
                            number of chart entries.
    """
    if len(chart.entries) != len(results):
        raise ChartResolverError(
            f"Match results are not on par: chart has {len(chart.entries)} entries, "
            f"but there are {len(results)} results",
            details={"entries": len(chart.entries), "results": len(results)}
        )

    rows = []
    for entry, result in zip(chart.entries, results):
        match = result.candidate.short_description if result.matched else NO_MATCH
        rows.append((entry.position, entry.short_description, match))

    entry_width = max([len(ENTRY_HEADER)] + [len(r[1]) for r in rows])
    match_width = max([len(MATCH_HEADER)] + [len(r[2]) for r in rows])
    table_width = entry_width + match_width + 13

    lines = [
        "=" * table_width,
        f"| {'#':>3} | {ENTRY_HEADER:<{entry_width}} | {MATCH_HEADER:<{match_width}} |",
        "=" * table_width,
    ]
    for position, entry_description, match in rows:
        lines.append(
            f"| {position:>3} | {entry_description:<{entry_width}} | {match:<{match_width}} |"
        )
        lines.append("-" * table_width)

    return "\n".join(lines) + "\n"


def report_path(chart: ChartInfo, reports_dir: Path) -> Path:
    return reports_dir / f"{chart.year}.md"


def write_match_report(chart: ChartInfo, table: str, reports_dir: Path) -> Path:
    """
    Write the match table of a chart as markdown.

    Creates reports_dir if needed and overwrites an existing report.

    Returns:
        Path of the written file.

    Raises:
        ChartResolverError: If the file cannot be written.
    """
    path = report_path(chart, reports_dir)
    content = f"# Catalog matches for charts *{chart.year}*\n\n{table}"

    try:
        reports_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ChartResolverError(
            f"Failed to write match report: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    logger.info(f"Match results for {chart.year}:\n{table}")
    logger.debug(f"Match report written to {path}")
    return path
