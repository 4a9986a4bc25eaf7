"""
Chart entries input.

Charts are scraped by a separate tool; this module reads its output, a
YAML file with the chart year and one record per position:

    year: 2001
    entries:
      - position: 1
        title: "Lady (Hear Me Tonight)"
        artists: ["Modjo"]
      - title: "Hie u jetzt"
        artists: ["Mia Aegerter"]
        local_act: true

Positions are optional and default to the 1-based list order.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from chart_resolver.catalog.models import SourceEntry
from chart_resolver.core.exceptions import EntryError


@dataclass(frozen=True)
class ChartInfo:
    """
    One yearly chart.

    Attributes:
        year: Chart year.
        entries: Entries in chart order.
    """

    year: int
    entries: tuple[SourceEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)


def load_entries(entries_path: Path) -> ChartInfo:
    """
    Load a chart from a YAML entries file.

    Args:
        entries_path: Path to the entries file.

    Returns:
        ChartInfo with one SourceEntry per record.

    Raises:
        EntryError: If the file is missing, is not valid YAML, or a record
                    lacks a title or artists.
    """
    if not entries_path.exists():
        raise EntryError(
            f"Entries file not found: {entries_path}",
            details={"file_path": str(entries_path)}
        )

    try:
        with open(entries_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise EntryError(
            f"Failed to read entries file: {e}",
            details={"file_path": str(entries_path), "original_error": str(e)}
        ) from e
    except yaml.YAMLError as e:
        raise EntryError(
            f"Invalid YAML syntax in entries file: {e}",
            details={"file_path": str(entries_path), "original_error": str(e)}
        ) from e

    if not isinstance(raw, dict):
        raise EntryError(
            "Entries file must contain a YAML dictionary",
            details={"file_path": str(entries_path)}
        )

    year = raw.get("year")
    if not isinstance(year, int) or isinstance(year, bool):
        raise EntryError(
            "'year' must be an integer",
            details={"file_path": str(entries_path), "value": year}
        )

    records = raw.get("entries")
    if not isinstance(records, list):
        raise EntryError(
            "'entries' must be a list",
            details={"file_path": str(entries_path)}
        )

    entries = tuple(
        _parse_entry(record, year, index)
        for index, record in enumerate(records, start=1)
    )
    return ChartInfo(year=year, entries=entries)


def _parse_entry(record: Any, year: int, index: int) -> SourceEntry:
    if not isinstance(record, dict):
        raise EntryError(
            f"Entry {index} must be a dictionary",
            details={"index": index}
        )

    title = record.get("title")
    if not isinstance(title, str) or not title.strip():
        raise EntryError(
            f"Entry {index} has no title",
            details={"index": index}
        )

    artists = record.get("artists")
    if isinstance(artists, str):
        artists = [artists]
    if (
        not isinstance(artists, list)
        or not artists
        or not all(isinstance(a, str) for a in artists)
    ):
        raise EntryError(
            f"Entry {index} ({title}) needs a list of artist names",
            details={"index": index, "title": title}
        )

    position = record.get("position", index)
    if not isinstance(position, int) or isinstance(position, bool) or position < 1:
        raise EntryError(
            f"Entry {index} ({title}) has an invalid position",
            details={"index": index, "value": position}
        )

    return SourceEntry(
        year=year,
        position=position,
        title=title.strip(),
        artists=tuple(a.strip() for a in artists),
        is_local_act=bool(record.get("local_act", False)),
    )
