"""
Data models for chart entries and catalog tracks.

This module defines immutable dataclasses for the two sides of a match:
the chart entry we are looking for and the catalog track a search returned.

Design Decisions:
    - All dataclasses are frozen (immutable) to prevent accidental modification
    - Artist lists are tuples so instances stay hashable
    - CandidateTrack fields follow the Spotify Web API track object
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SourceEntry:
    """
    Immutable representation of one chart position.

    Attributes:
        year: Chart year. Used for the year clause of searches, the artist
              alias table and the release date score.
              Example: 2001
        position: Position within the chart (1-based).
        title: Song title as printed by the chart.
               Example: "Lady (Hear Me Tonight)"
        artists: Artist names in chart order.
                 Example: ("Modjo",)
        is_local_act: Whether the chart marks the act as local.
    """

    year: int
    position: int
    title: str
    artists: tuple[str, ...]
    is_local_act: bool = False

    @property
    def short_description(self) -> str:
        """
        Compact description used in logs and reports.

        Example:
            "Lady [Modjo]" or "Hie u jetzt [Mia Aegerter] [local]"
        """
        description = f"{self.title} [{', '.join(self.artists)}]"
        if self.is_local_act:
            description += " [local]"
        return description


@dataclass(frozen=True)
class CandidateTrack:
    """
    Immutable representation of a catalog search result.

    Attributes:
        id: Catalog track ID (22-character base62 string for Spotify).
        title: Track title as stored in the catalog.
               Example: "Lady (Hear Me Tonight) - Radio Edit"
        artist_names: Artist names in catalog order.
        album_title: Album name.
        release_date: Album release date, "YYYY", "YYYY-MM" or "YYYY-MM-DD".
        popularity: Catalog popularity score (0-100).
        duration_ms: Track duration in milliseconds.
        track_number: Position of the track within its album.
    """

    id: str
    title: str
    artist_names: tuple[str, ...]
    album_title: str = ""
    release_date: str = ""
    popularity: int = 0
    duration_ms: int = 0
    track_number: int = 1

    @classmethod
    def from_spotify_api(cls, track_data: dict[str, Any]) -> "CandidateTrack":
        """
        Create a CandidateTrack from a Spotify search result item.

        Args:
            track_data: One element of response["tracks"]["items"].

        Returns:
            CandidateTrack populated with the extracted data.

        Raises:
            KeyError: If the item has no 'id'.
        """
        album = track_data.get("album") or {}
        artists = track_data.get("artists") or []

        return cls(
            id=track_data["id"],
            title=track_data.get("name") or "",
            artist_names=tuple(
                a.get("name", "") for a in artists
                if isinstance(a, dict) and a.get("name")
            ),
            album_title=album.get("name") or "",
            release_date=album.get("release_date") or "",
            popularity=int(track_data.get("popularity") or 0),
            duration_ms=int(track_data.get("duration_ms") or 0),
            track_number=int(track_data.get("track_number") or 1),
        )

    @property
    def release_year(self) -> int | None:
        """Year part of release_date, or None if it cannot be parsed."""
        try:
            return int(self.release_date[:4])
        except ValueError:
            return None

    @property
    def short_description(self) -> str:
        """
        Compact description used in logs and reports.

        Example:
            "Lady [Modjo], Modjo (2001-06-18)"
        """
        return (
            f"{self.title} [{', '.join(self.artist_names)}], "
            f"{self.album_title} ({self.release_date})"
        )
