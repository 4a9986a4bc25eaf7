"""
Search query cascade for one chart entry.

Tagged queries (track:, artist:, year:) are precise, but the catalog index
does not always tag-match legitimate results - alternate titling, tracks
only found on compilations, artists credited differently. Each later tier
drops some tags or narrows the artist list, trading precision for recall.

Tiers, in priority order (Y = chart year):

    EXACT_MATCH                          track:"T" artist:"A" artist:"B" year:Y-1-Y
    MATCH_WITHOUT_ARTIST_TAGS            track:"T" "A" "B" year:Y-1-Y
    MATCH_WITHOUT_YEAR_TAG               track:"T" artist:A artist:B    (first 2 artists)
    MATCH_WITHOUT_YEAR_AND_ARTIST_TAGS   track:"T" "A" "B"              (first 2 artists)
    MATCH_WITHOUT_TRACK_AND_ARTIST_TAGS  "T" "A" "B" year:Y-1-Y
    MATCH_WITHOUT_TAGS                   "T" "A" "B"
"""

import enum

from chart_resolver.catalog.models import SourceEntry
from chart_resolver.matching.aliases import resolve_aliases
from chart_resolver.matching.normalize import strip_non_ascii


# Artist clauses of the untagged-year tiers only use the leading artists
MAX_ARTISTS_WITHOUT_YEAR = 2


class SearchTier(enum.IntEnum):
    """Cascade stage. Lower value means higher priority."""

    EXACT_MATCH = 0
    MATCH_WITHOUT_ARTIST_TAGS = 1
    MATCH_WITHOUT_YEAR_TAG = 2
    MATCH_WITHOUT_YEAR_AND_ARTIST_TAGS = 3
    MATCH_WITHOUT_TRACK_AND_ARTIST_TAGS = 4
    MATCH_WITHOUT_TAGS = 5


def _tagged_title(title: str) -> str:
    return f'track:"{title}"'


def _quoted(value: str) -> str:
    return f'"{value}"'


def _tagged_artist(artist: str) -> str:
    return f'artist:"{artist}"'


def _tagged_artist_unquoted(artist: str) -> str:
    return f"artist:{artist}"


def _year_range(year: int) -> str:
    return f"year:{year - 1}-{year}"


def _join_clauses(clauses: list[str]) -> str:
    query = " ".join(clause.strip() for clause in clauses if clause and clause.strip())
    return strip_non_ascii(query)


class QueryCascadeGenerator:
    """
    Builds the six search queries for a chart entry.

    The generator is stateless; one instance can serve every entry.

    Example:
        cascade = QueryCascadeGenerator().build_cascade(entry)
        for tier, query in cascade:
            outcome = client.search(query)
    """

    def build_cascade(self, entry: SourceEntry) -> list[tuple[SearchTier, str]]:
        """
        Build the ordered (tier, query) list for an entry.

        Artist aliases are resolved first, so every clause sees the
        catalog name of the act.
        """
        artists = [a.strip() for a in resolve_aliases(entry.artists, entry.year) if a.strip()]
        leading = artists[:MAX_ARTISTS_WITHOUT_YEAR]
        title = entry.title.strip()
        year = _year_range(entry.year)

        queries = {
            SearchTier.EXACT_MATCH: [
                _tagged_title(title), *map(_tagged_artist, artists), year,
            ],
            SearchTier.MATCH_WITHOUT_ARTIST_TAGS: [
                _tagged_title(title), *map(_quoted, artists), year,
            ],
            SearchTier.MATCH_WITHOUT_YEAR_TAG: [
                _tagged_title(title), *map(_tagged_artist_unquoted, leading),
            ],
            SearchTier.MATCH_WITHOUT_YEAR_AND_ARTIST_TAGS: [
                _tagged_title(title), *map(_quoted, leading),
            ],
            SearchTier.MATCH_WITHOUT_TRACK_AND_ARTIST_TAGS: [
                _quoted(title), *map(_quoted, artists), year,
            ],
            SearchTier.MATCH_WITHOUT_TAGS: [
                _quoted(title), *map(_quoted, artists),
            ],
        }

        return [(tier, _join_clauses(queries[tier])) for tier in SearchTier]
