"""
Corrections for known mistakes in scraped charts.

Some chart pages print titles the catalog cannot match, e.g. the German
and English titles of a single glued together. Each EntryFix replaces one
such entry with the catalog spelling. Fixes only apply when
matching.normalize_entries is enabled.
"""

from dataclasses import dataclass, replace

from chart_resolver.catalog.models import SourceEntry
from chart_resolver.chart.entries import ChartInfo
from chart_resolver.core.logger import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class EntryFix:
    """
    Replacement for one scraped entry.

    An entry is fixed only when year, title and artist list all equal the
    originals given here.
    """

    year: int
    title: str
    artists: tuple[str, ...]
    fixed_title: str
    fixed_artists: tuple[str, ...]

    def applies_to(self, entry: SourceEntry) -> bool:
        return (
            entry.year == self.year
            and entry.title == self.title
            and tuple(entry.artists) == self.artists
        )


DEFAULT_FIXES = (
    EntryFix(
        year=2003,
        title="Hie u jetzt - Right Here Right Now",
        artists=("Mia Aegerter",),
        fixed_title="Hie u jetzt",
        fixed_artists=("Mia Aegerter",),
    ),
)


def fix_entry(entry: SourceEntry, fixes: tuple[EntryFix, ...] = DEFAULT_FIXES) -> SourceEntry:
    for fix in fixes:
        if fix.applies_to(entry):
            logger.debug(
                f"({entry.position}) Fixing {entry.short_description} -> "
                f"{fix.fixed_title} [{', '.join(fix.fixed_artists)}]"
            )
            return replace(entry, title=fix.fixed_title, artists=fix.fixed_artists)
    return entry


def apply_fixes(chart: ChartInfo, fixes: tuple[EntryFix, ...] = DEFAULT_FIXES) -> ChartInfo:
    """Return a copy of chart with every matching fix applied."""
    return replace(chart, entries=tuple(fix_entry(entry, fixes) for entry in chart.entries))
