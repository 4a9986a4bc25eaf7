"""
Artist name substitutions applied before searching and scoring.

Charts print some acts under a name the catalog does not know them by.
Prince charted as "The Symbol" in the early nineties, for example, while
the catalog lists those releases under "Prince". Later charts use the same
string for a different act, so those aliases only apply up to a cutoff year.
"""

# Known pseudonym -> catalog name, only for charts up to ALIAS_MAX_YEAR
ARTIST_ALIASES = {
    "the symbol": "Prince",
}
ALIAS_MAX_YEAR = 1994

# Spelling differences between chart and catalog, independent of the year.
# Only used when comparing artist names, never in search queries.
ARTIST_SPELLINGS = {
    "star academy": "Star Academy I",
    "star academy 1": "Star Academy I",
    "star academy 3": "Star Academy III",
}


def resolve_alias(artist: str, year: int) -> str:
    """
    Replace a known pseudonym by the catalog name for charts up to 1994.

    Example:
        resolve_alias("The Symbol", 1990) -> "Prince"
        resolve_alias("The Symbol", 2005) -> "The Symbol"
    """
    if year <= ALIAS_MAX_YEAR:
        return ARTIST_ALIASES.get(artist.strip().lower(), artist)
    return artist


def resolve_aliases(artists: tuple[str, ...] | list[str], year: int) -> list[str]:
    return [resolve_alias(artist, year) for artist in artists]


def canonical_artist(artist: str, year: int) -> str:
    """Alias resolution followed by the spelling table, for scoring."""
    aliased = resolve_alias(artist, year)
    return ARTIST_SPELLINGS.get(aliased.strip().lower(), aliased)
